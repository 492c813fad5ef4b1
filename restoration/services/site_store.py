"""
Read access to sites, projects and the metadata of their polygons.
"""
import logging
from typing import Dict, Iterable, List

from django.db.models import Sum

from restoration.exceptions import PolygonNotFound, SiteNotFound
from restoration.models import Project, Site, SitePolygon

logger = logging.getLogger(__name__)


class SiteStore:

    def get_site(self, site_uuid: str) -> Site:
        site = Site.objects.select_related('project').filter(uuid=site_uuid).first()
        if site is None:
            raise SiteNotFound(site_uuid)
        return site

    def active_polygon_ids(self, site_uuid: str) -> List[str]:
        """UUIDs of the active polygons of a site, in submission order."""
        polygon_uuids = (
            SitePolygon.objects.filter(
                site__uuid=site_uuid,
                site__deleted_at__isnull=True,
                is_active=True,
            )
            .order_by('id')
            .values_list('polygon_uuid', flat=True)
        )
        # A polygon may appear in more than one active row; keep first occurrence
        return list(dict.fromkeys(polygon_uuids))

    def site_polygon(self, polygon_uuid: str) -> SitePolygon:
        return self.site_polygons([polygon_uuid])[polygon_uuid]

    def site_polygons(self, polygon_uuids: Iterable[str]) -> Dict[str, SitePolygon]:
        """
        Active site polygon per polygon UUID, newest row winning.

        Raises PolygonNotFound for the first id without an active site polygon.
        """
        polygon_uuids = list(polygon_uuids)
        found = {}
        for site_polygon in (
            SitePolygon.objects.select_related('site', 'site__project')
            .filter(polygon_uuid__in=polygon_uuids, is_active=True)
            .order_by('id')
        ):
            found[site_polygon.polygon_uuid] = site_polygon

        for polygon_uuid in polygon_uuids:
            if polygon_uuid not in found:
                raise PolygonNotFound(polygon_uuid)
        return {polygon_uuid: found[polygon_uuid] for polygon_uuid in polygon_uuids}

    def site_of(self, polygon_uuid: str) -> Site:
        return self.site_polygon(polygon_uuid).site

    def project_of(self, site_uuid: str) -> Project:
        return self.get_site(site_uuid).project

    def total_area_for_site(self, site: Site) -> float:
        """Sum of stored calc_area over the site's active polygons, in hectares."""
        total = SitePolygon.objects.filter(site=site, is_active=True).aggregate(total=Sum('calc_area'))['total']
        return float(total or 0)

    def total_area_for_project(self, project: Project) -> float:
        total = SitePolygon.objects.filter(
            site__project=project,
            site__deleted_at__isnull=True,
            is_active=True,
        ).aggregate(total=Sum('calc_area'))['total']
        return float(total or 0)
