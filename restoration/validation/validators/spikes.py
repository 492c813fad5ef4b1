"""
Spike check.

A spike is a vertex where the boundary folds back on itself: the angle
between its two edges is sharper than SPIKE_ANGLE_THRESHOLD degrees.
"""
from restoration.config.validation import get_validation_setting
from restoration.utils import geometry as geometry_utils
from restoration.validation.base import BaseValidator, verdict


class SpikesValidator(BaseValidator):
    supports_batch = True
    supports_geometry = True

    def validate_polygon(self, polygon_uuid):
        return self._check(self.geometry_store.geometry(polygon_uuid))

    def validate_polygons(self, polygon_uuids):
        polygon_uuids = list(polygon_uuids)
        geometries = self.geometry_store.geometries(polygon_uuids)
        return [
            {'polygon_uuid': polygon_uuid, **self._check(geometries[polygon_uuid])}
            for polygon_uuid in polygon_uuids
        ]

    def validate_geometry(self, geometry, properties=None):
        return self._check(geometry)

    def _check(self, geometry):
        threshold = float(get_validation_setting('SPIKE_ANGLE_THRESHOLD'))
        spikes = geometry_utils.find_spikes(geometry, threshold)
        return verdict(not spikes, {'spikes': spikes, 'spikeCount': len(spikes)})
