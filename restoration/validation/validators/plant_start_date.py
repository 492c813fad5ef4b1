"""
Plant start date check.

The planting date of a polygon cannot be earlier than MIN_PLANT_START_DATE
nor earlier than the start date of its site.
"""
from restoration.config.validation import get_min_plant_start_date
from restoration.validation.base import BaseValidator, verdict

MISSING_VALUE = 'MISSING_VALUE'
DATE_TOO_EARLY = 'DATE_TOO_EARLY'
DATE_BEFORE_SITE_START = 'DATE_BEFORE_SITE_START'


def _isoformat(value):
    return value.isoformat() if value is not None else None


class PlantStartDateValidator(BaseValidator):
    supports_batch = True

    def validate_polygon(self, polygon_uuid):
        return self._check(polygon_uuid, self.site_store.site_polygon(polygon_uuid))

    def validate_polygons(self, polygon_uuids):
        polygon_uuids = list(polygon_uuids)
        site_polygons = self.site_store.site_polygons(polygon_uuids)
        return [
            {'polygon_uuid': polygon_uuid, **self._check(polygon_uuid, site_polygons[polygon_uuid])}
            for polygon_uuid in polygon_uuids
        ]

    def _check(self, polygon_uuid, site_polygon):
        site = site_polygon.site
        plant_start = site_polygon.plant_start
        global_min_date = get_min_plant_start_date()
        site_start_date = site.start_date if site is not None else None
        min_date = max(global_min_date, site_start_date) if site_start_date else global_min_date

        if plant_start is None:
            error_type = MISSING_VALUE
        elif plant_start < global_min_date:
            error_type = DATE_TOO_EARLY
        elif plant_start < min_date:
            error_type = DATE_BEFORE_SITE_START
        else:
            return verdict(True)

        return verdict(False, {
            'errorType': error_type,
            'polygonUuid': polygon_uuid,
            'polygonName': site_polygon.poly_name,
            'siteName': site.name if site is not None else None,
            'providedValue': _isoformat(plant_start),
            'minDate': min_date.isoformat(),
            'siteStartDate': _isoformat(site_start_date),
        })
