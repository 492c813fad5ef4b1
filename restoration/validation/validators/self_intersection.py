"""
Self-intersection check: every ring of the polygon must be simple.
"""
from restoration.utils import geometry as geometry_utils
from restoration.validation.base import BaseValidator, verdict


class SelfIntersectionValidator(BaseValidator):
    supports_batch = True
    supports_geometry = True

    def validate_polygon(self, polygon_uuid):
        return verdict(self.geometry_store.is_simple(polygon_uuid))

    def validate_polygons(self, polygon_uuids):
        polygon_uuids = list(polygon_uuids)
        geometries = self.geometry_store.geometries(polygon_uuids)
        return [
            {'polygon_uuid': polygon_uuid, **verdict(geometry_utils.is_simple(geometries[polygon_uuid]))}
            for polygon_uuid in polygon_uuids
        ]

    def validate_geometry(self, geometry, properties=None):
        return verdict(geometry_utils.is_simple(geometry))
