"""
Polygon size check: a single polygon may not exceed MAX_POLYGON_HECTARES.
"""
from restoration.config.validation import get_validation_setting
from restoration.utils import geometry as geometry_utils
from restoration.validation.base import BaseValidator, verdict


class PolygonSizeValidator(BaseValidator):
    supports_batch = True
    supports_geometry = True

    def validate_polygon(self, polygon_uuid):
        return self._check(self.geometry_store.area(polygon_uuid))

    def validate_polygons(self, polygon_uuids):
        polygon_uuids = list(polygon_uuids)
        areas = self.geometry_store.area_many(polygon_uuids)
        return [
            {'polygon_uuid': polygon_uuid, **self._check(areas[polygon_uuid])}
            for polygon_uuid in polygon_uuids
        ]

    def validate_geometry(self, geometry, properties=None):
        return self._check(geometry_utils.area_hectares(geometry))

    def _check(self, area_hectares):
        max_hectares = get_validation_setting('MAX_POLYGON_HECTARES')
        return verdict(area_hectares <= max_hectares, {
            'areaHectares': area_hectares,
            'maxAllowedHectares': max_hectares,
        })
