"""
Estimated area check.

Compares the hectares mapped so far against the restoration goals. The sum
of calc_area over the active polygons of the site, and over every site of
the project, has to land between AREA_LOWER_BOUND_MULTIPLIER and
AREA_UPPER_BOUND_MULTIPLIER times the matching goal. A level without a
positive goal reports nulls and is skipped; with no goal at all the
polygon is invalid.

The verdict depends on the polygon's site and project only, so polygons of
the same site share the same extra_info.
"""
from restoration.config.validation import get_validation_setting
from restoration.validation.base import BaseValidator, verdict


class EstimatedAreaValidator(BaseValidator):
    supports_batch = True

    def validate_polygon(self, polygon_uuid):
        site = self.site_store.site_polygon(polygon_uuid).site
        return self._check(site, {}, {})

    def validate_polygons(self, polygon_uuids):
        polygon_uuids = list(polygon_uuids)
        site_polygons = self.site_store.site_polygons(polygon_uuids)
        site_cache = {}
        project_cache = {}
        return [
            {'polygon_uuid': polygon_uuid, **self._check(site_polygons[polygon_uuid].site, site_cache, project_cache)}
            for polygon_uuid in polygon_uuids
        ]

    def _check(self, site, site_cache, project_cache):
        if site.id not in site_cache:
            site_cache[site.id] = self._level(site.hectares_to_restore_goal, lambda: self.site_store.total_area_for_site(site))
        site_level = site_cache[site.id]

        project = site.project
        if project.id not in project_cache:
            project_cache[project.id] = self._level(
                project.total_hectares_restored_goal,
                lambda: self.site_store.total_area_for_project(project),
            )
        project_level = project_cache[project.id]

        # Levels without a goal cannot be reconciled and are left out of the verdict
        applicable = [level for level in (site_level, project_level) if level['goal'] is not None and level['goal'] > 0]
        valid = bool(applicable) and all(level['valid'] for level in applicable)

        return verdict(valid, {
            'sumAreaSite': site_level['sum'],
            'sumAreaProject': project_level['sum'],
            'percentageSite': site_level['percentage'],
            'percentageProject': project_level['percentage'],
            'totalAreaSite': site_level['goal'],
            'totalAreaProject': project_level['goal'],
            'lowerBoundSite': site_level['lower_bound'],
            'upperBoundSite': site_level['upper_bound'],
            'lowerBoundProject': project_level['lower_bound'],
            'upperBoundProject': project_level['upper_bound'],
        })

    def _level(self, goal, load_sum):
        """Band check for one level (site or project)."""
        if goal is None or goal <= 0:
            return {
                'valid': False,
                'sum': None,
                'percentage': None,
                'goal': goal,
                'lower_bound': None,
                'upper_bound': None,
            }

        area_sum = load_sum()
        lower_bound = goal * get_validation_setting('AREA_LOWER_BOUND_MULTIPLIER')
        upper_bound = goal * get_validation_setting('AREA_UPPER_BOUND_MULTIPLIER')
        return {
            'valid': lower_bound <= area_sum <= upper_bound,
            'sum': round(area_sum),
            'percentage': round(area_sum / goal * 100),
            'goal': goal,
            'lower_bound': round(lower_bound, 2),
            'upper_bound': round(upper_bound, 2),
        }
