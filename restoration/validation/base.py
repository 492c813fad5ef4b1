"""
Base validator class for polygon checks.

Every check answers one question about one polygon and returns a verdict
dict. Checks that can load their inputs for many polygons at once also
implement validate_polygons(); it must give the same verdicts as calling
validate_polygon() per id.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List
import logging

from restoration.services.geometry_store import GeometryStore
from restoration.services.site_store import SiteStore

logger = logging.getLogger(__name__)


def verdict(valid: bool, extra_info=None) -> Dict[str, Any]:
    return {'valid': bool(valid), 'extra_info': extra_info}


class BaseValidator(ABC):
    """
    Base class for all polygon validators.

    Validators are stateless apart from their store collaborators, so one
    instance is shared by every caller.

    Example:
        class AlwaysValidValidator(BaseValidator):
            def validate_polygon(self, polygon_uuid):
                return verdict(True)
    """

    # Set by subclasses that override validate_polygons() with a bulk query
    supports_batch = False
    # Set by subclasses that can check an unsaved geometry via validate_geometry()
    supports_geometry = False

    def __init__(self, geometry_store: GeometryStore = None, site_store: SiteStore = None):
        self.geometry_store = geometry_store or GeometryStore()
        self.site_store = site_store or SiteStore()

    @abstractmethod
    def validate_polygon(self, polygon_uuid: str) -> Dict[str, Any]:
        """
        Check a single polygon.

        Returns:
            Dict with:
                - valid: bool
                - extra_info: JSON-serialisable details or None

        Raises:
            PolygonNotFound: the polygon has no geometry or metadata to check
        """

    def validate_polygons(self, polygon_uuids: Iterable[str]) -> List[Dict[str, Any]]:
        """
        Check several polygons, in input order.

        Returns a list of dicts with polygon_uuid, valid and extra_info.
        """
        return [
            {'polygon_uuid': polygon_uuid, **self.validate_polygon(polygon_uuid)}
            for polygon_uuid in polygon_uuids
        ]

    def validate_geometry(self, geometry, properties=None) -> Dict[str, Any]:
        """
        Check an unsaved geometry without touching stored polygons.

        Args:
            geometry: shapely Polygon or MultiPolygon
            properties: GeoJSON feature properties, or None

        Returns:
            Dict with valid and extra_info, shaped as validate_polygon()
        """
        raise NotImplementedError(f"{self.__class__.__name__} cannot check unsaved geometries")

    def __repr__(self):
        return f"<{self.__class__.__name__}>"
