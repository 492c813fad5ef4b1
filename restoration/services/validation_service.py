"""
Synchronous entry point of the polygon validation engine.

Runs registered checks against polygons, records every outcome through the
ResultStore and reads the recorded outcomes back per polygon or per site.
"""
import logging
from collections import OrderedDict
from typing import Any, Dict, Iterable, List, Optional

from django.utils import timezone
from shapely.errors import ShapelyError

from restoration.config.validation import get_validation_setting
from restoration.exceptions import (
    InvalidGeometry,
    InvalidPageNumber,
    InvalidPageSize,
    PolygonNotFound,
    ValidationEngineException,
    ValidatorExecutionFailure,
)
from restoration.services.geometry_store import GeometryStore
from restoration.services.result_store import ResultStore
from restoration.services.site_store import SiteStore
from restoration.utils import geometry as geometry_utils
from restoration.validation import registry

logger = logging.getLogger(__name__)


class ValidationService:

    def __init__(self, result_store: ResultStore = None, geometry_store: GeometryStore = None,
                 site_store: SiteStore = None):
        self.result_store = result_store or ResultStore()
        self.geometry_store = geometry_store or GeometryStore()
        self.site_store = site_store or SiteStore()

    def validate_polygons(self, polygon_uuids: Iterable[str], validation_types=None) -> List[Dict[str, Any]]:
        """
        Run the requested checks for every polygon and store the outcomes.

        Args:
            polygon_uuids: Polygons to check; duplicates are checked once
            validation_types: ValidationTypes (or names); defaults to every
                implemented type

        Returns:
            Flat list of {polygonUuid, criteriaId, valid, createdAt, extraInfo}

        Raises:
            UnknownValidationType: before any check runs
            PolygonNotFound: a polygon has nothing to check
            ValidatorExecutionFailure: a check failed unexpectedly
        """
        polygon_uuids = list(dict.fromkeys(polygon_uuids))
        if validation_types is None:
            validation_types = registry.get_implemented_types()

        # Resolve everything first so an unknown type aborts before any write
        resolved = [
            (registry.normalize_validation_type(validation_type), *registry.resolve(validation_type))
            for validation_type in validation_types
        ]

        results = []
        if not polygon_uuids:
            return results

        for validation_type, criteria_id, validator in resolved:
            logger.debug(f"Running {validation_type.value} on {len(polygon_uuids)} polygon(s)")
            for verdict in self._run_validator(validation_type, validator, polygon_uuids):
                current = self.result_store.write_result(
                    verdict['polygon_uuid'],
                    criteria_id,
                    verdict['valid'],
                    verdict['extra_info'],
                )
                results.append({
                    'polygonUuid': current.polygon_uuid,
                    'criteriaId': current.criteria_id,
                    'valid': current.valid,
                    'createdAt': current.created_at.isoformat(),
                    'extraInfo': current.extra_info,
                })

        logger.info(f"Validated {len(polygon_uuids)} polygon(s) against {len(resolved)} check(s)")
        return results

    def _run_validator(self, validation_type, validator, polygon_uuids):
        try:
            if validator.supports_batch:
                return validator.validate_polygons(polygon_uuids)
            return [
                {'polygon_uuid': polygon_uuid, **validator.validate_polygon(polygon_uuid)}
                for polygon_uuid in polygon_uuids
            ]
        except ValidationEngineException:
            raise
        except Exception as e:
            logger.error(f"{validation_type.value} check failed: {e}")
            raise ValidatorExecutionFailure(f"{validation_type.value} check failed: {e}") from e

    def validate_geometries(self, feature_collections: Iterable[Dict[str, Any]], validation_types=None) -> List[Dict[str, Any]]:
        """
        Run checks on raw GeoJSON features without storing anything.

        Features are identified by properties.id when given, otherwise by
        "feature-{index}" counted across all collections. The identifier is
        only used to match results back to the input.

        Args:
            feature_collections: GeoJSON FeatureCollection dicts
            validation_types: defaults to every check that can run on
                unsaved geometries

        Returns:
            List of {polygonUuid, criteriaList} in input order

        Raises:
            UnknownValidationType, UnsupportedGeometryValidation: before any check runs
            InvalidGeometry: a collection or feature is malformed
        """
        if validation_types is None:
            validation_types = registry.get_geometry_types()

        resolved = [
            (registry.normalize_validation_type(validation_type), *registry.resolve_for_geometry(validation_type))
            for validation_type in validation_types
        ]
        features = self._parse_features(feature_collections)

        checked_at = timezone.now().isoformat()
        results = []
        for feature_id, geometry, properties in features:
            criteria_list = []
            for validation_type, criteria_id, validator in resolved:
                try:
                    outcome = validator.validate_geometry(geometry, properties)
                except ValidationEngineException:
                    raise
                except Exception as e:
                    logger.error(f"{validation_type.value} check failed on {feature_id}: {e}")
                    raise ValidatorExecutionFailure(f"{validation_type.value} check failed: {e}") from e
                criteria_list.append({
                    'criteriaId': criteria_id,
                    'validationType': validation_type.value,
                    'valid': outcome['valid'],
                    'createdAt': checked_at,
                    'extraInfo': outcome['extra_info'],
                })
            results.append({'polygonUuid': feature_id, 'criteriaList': criteria_list})

        logger.info(f"Checked {len(features)} unsaved feature(s) against {len(resolved)} check(s)")
        return results

    def _parse_features(self, feature_collections):
        features = []
        for collection in feature_collections:
            if not isinstance(collection, dict) or not isinstance(collection.get('features'), list):
                raise InvalidGeometry("Expected a GeoJSON FeatureCollection with a features list")
            for feature in collection['features']:
                index = len(features)
                if not isinstance(feature, dict):
                    raise InvalidGeometry(f"Feature {index} is not a GeoJSON object")
                properties = feature.get('properties')
                feature_id = None
                if isinstance(properties, dict) and properties.get('id') is not None:
                    feature_id = str(properties['id'])
                feature_id = feature_id or f"feature-{index}"
                try:
                    geometry = geometry_utils.to_shape(feature.get('geometry'))
                except (ShapelyError, ValueError, TypeError, KeyError, AttributeError) as e:
                    raise InvalidGeometry(f"Invalid geometry for {feature_id}: {e}") from e
                features.append((feature_id, geometry, properties))
        return features

    def get_polygon_validation(self, polygon_uuid: str) -> Dict[str, Any]:
        if not self.geometry_store.exists(polygon_uuid):
            raise PolygonNotFound(polygon_uuid)

        return {
            'polygonUuid': polygon_uuid,
            'criteriaList': [result.to_dict() for result in self.result_store.current_for_polygon(polygon_uuid)],
        }

    def get_polygon_validation_history(self, polygon_uuid: str, criteria_id: Optional[int] = None) -> Dict[str, Any]:
        if not self.geometry_store.exists(polygon_uuid):
            raise PolygonNotFound(polygon_uuid)

        return {
            'polygonUuid': polygon_uuid,
            'history': [
                historic.to_dict()
                for historic in self.result_store.history_for_polygon(polygon_uuid, criteria_id)
            ],
        }

    def get_site_polygon_uuids(self, site_uuid: str) -> List[str]:
        return self.site_store.active_polygon_ids(site_uuid)

    def get_site_validations(self, site_uuid: str, page_size: int, page_number: int = 1,
                             criteria_id: Optional[int] = None) -> Dict[str, Any]:
        """
        Current results of a site's active polygons, grouped per polygon and paged.

        Polygons are ordered by their most recent check, newest first. With
        criteria_id only results of that criteria are loaded, so polygons
        never checked for it drop out of the page and the total.

        Returns:
            {'validations': [{polygonUuid, criteriaList}], 'total': distinct polygons}
        """
        max_page_size = get_validation_setting('MAX_PAGE_SIZE')
        if page_size is None or page_size < 1 or page_size > max_page_size:
            raise InvalidPageSize(page_size, max_page_size)
        if page_number is None or page_number < 1:
            raise InvalidPageNumber(page_number)

        polygon_uuids = self.get_site_polygon_uuids(site_uuid)
        if not polygon_uuids:
            return {'validations': [], 'total': 0}

        grouped = OrderedDict()
        for result in self.result_store.current_for_polygons(polygon_uuids, criteria_id):
            grouped.setdefault(result.polygon_uuid, []).append(result.to_dict())

        start = (page_number - 1) * page_size
        page = list(grouped.items())[start:start + page_size]
        return {
            'validations': [
                {'polygonUuid': polygon_uuid, 'criteriaList': criteria_list}
                for polygon_uuid, criteria_list in page
            ],
            'total': len(grouped),
        }
