"""
Read access to polygon geometry keyed by polygon UUID.
"""
import logging
from typing import Dict, Iterable, List

from shapely.errors import ShapelyError

from restoration.exceptions import PolygonNotFound, ValidatorExecutionFailure
from restoration.models import PolygonGeometry, SitePolygon
from restoration.utils import geometry as geometry_utils

logger = logging.getLogger(__name__)


class GeometryStore:

    def exists(self, polygon_uuid: str) -> bool:
        return PolygonGeometry.objects.filter(uuid=polygon_uuid).exists()

    def exists_many(self, polygon_uuids: Iterable[str]) -> set:
        return set(
            PolygonGeometry.objects.filter(uuid__in=list(polygon_uuids)).values_list('uuid', flat=True)
        )

    def geometry(self, polygon_uuid: str):
        return self.geometries([polygon_uuid])[polygon_uuid]

    def geometries(self, polygon_uuids: Iterable[str]) -> Dict[str, object]:
        """
        Load shapely geometries for the given polygons.

        Raises PolygonNotFound for the first id (in input order) without a
        stored geometry.
        """
        polygon_uuids = list(polygon_uuids)
        rows = dict(
            PolygonGeometry.objects.filter(uuid__in=polygon_uuids).values_list('uuid', 'geom')
        )
        geometries = {}
        for polygon_uuid in polygon_uuids:
            if polygon_uuid not in rows:
                raise PolygonNotFound(polygon_uuid)
            geometries[polygon_uuid] = self._parse(polygon_uuid, rows[polygon_uuid])
        return geometries

    def boundary(self, polygon_uuid: str) -> List:
        """Exterior and interior rings as lists of [lon, lat] pairs."""
        geometry = self.geometry(polygon_uuid)
        return [[list(point[:2]) for point in ring.coords] for ring in geometry_utils.iter_rings(geometry)]

    def is_simple(self, polygon_uuid: str) -> bool:
        return geometry_utils.is_simple(self.geometry(polygon_uuid))

    def is_simple_many(self, polygon_uuids: Iterable[str]) -> Dict[str, bool]:
        return {
            polygon_uuid: geometry_utils.is_simple(geometry)
            for polygon_uuid, geometry in self.geometries(polygon_uuids).items()
        }

    def area(self, polygon_uuid: str) -> float:
        return self.area_many([polygon_uuid])[polygon_uuid]

    def area_many(self, polygon_uuids: Iterable[str]) -> Dict[str, float]:
        """
        Area in hectares per polygon.

        The calc_area stored on the active site polygon wins. Polygons without
        a stored area are measured from their geometry; a site polygon with
        neither counts as 0.
        """
        polygon_uuids = list(polygon_uuids)
        stored = {}
        for polygon_uuid, calc_area in (
            SitePolygon.objects.filter(polygon_uuid__in=polygon_uuids, is_active=True)
            .order_by('id')
            .values_list('polygon_uuid', 'calc_area')
        ):
            stored[polygon_uuid] = calc_area

        missing_area = [uuid for uuid in polygon_uuids if stored.get(uuid) is None]
        geometry_rows = dict(
            PolygonGeometry.objects.filter(uuid__in=missing_area).values_list('uuid', 'geom')
        )

        areas = {}
        for polygon_uuid in polygon_uuids:
            if stored.get(polygon_uuid) is not None:
                areas[polygon_uuid] = float(stored[polygon_uuid])
            elif polygon_uuid in geometry_rows:
                geometry = self._parse(polygon_uuid, geometry_rows[polygon_uuid])
                areas[polygon_uuid] = geometry_utils.area_hectares(geometry)
            elif polygon_uuid in stored:
                areas[polygon_uuid] = 0.0
            else:
                raise PolygonNotFound(polygon_uuid)
        return areas

    def _parse(self, polygon_uuid, geojson):
        try:
            return geometry_utils.to_shape(geojson)
        except (ShapelyError, ValueError, TypeError, KeyError, AttributeError) as e:
            logger.error(f"Unreadable geometry for polygon {polygon_uuid}: {e}")
            raise ValidatorExecutionFailure(f"Unreadable geometry for polygon {polygon_uuid}: {e}") from e
