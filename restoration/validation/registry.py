"""
Validator registry for polygon checks.

Maps every implemented ValidationType to its validator instance. The
registry is built once at import time and only read afterwards.

To add a new check:
1. Create a validator class inheriting from BaseValidator
2. Give its ValidationType a criteria id in constants/validation_types.py
3. Add an entry to VALIDATION_REGISTRY below
"""
from restoration.constants.validation_types import (
    CRITERIA_ID_BY_TYPE,
    TYPE_BY_CRITERIA_ID,
    ValidationType,
)
from restoration.exceptions import UnknownValidationType, UnsupportedGeometryValidation
from restoration.validation.validators.data_completeness import DataCompletenessValidator
from restoration.validation.validators.estimated_area import EstimatedAreaValidator
from restoration.validation.validators.plant_start_date import PlantStartDateValidator
from restoration.validation.validators.polygon_size import PolygonSizeValidator
from restoration.validation.validators.self_intersection import SelfIntersectionValidator
from restoration.validation.validators.spikes import SpikesValidator


VALIDATION_REGISTRY = {
    ValidationType.SELF_INTERSECTION: {
        'validator': SelfIntersectionValidator(),
        'display_name': 'Self Intersection',
        'description': 'Polygon boundary must not cross itself',
    },
    ValidationType.SPIKES: {
        'validator': SpikesValidator(),
        'display_name': 'Spikes',
        'description': 'Polygon boundary must not contain narrow protrusions',
    },
    ValidationType.DATA_COMPLETENESS: {
        'validator': DataCompletenessValidator(),
        'display_name': 'Data Completeness',
        'description': 'Required polygon attributes must be filled in',
    },
    ValidationType.PLANT_START_DATE: {
        'validator': PlantStartDateValidator(),
        'display_name': 'Plant Start Date',
        'description': 'Planting must start after the site start date',
    },
    ValidationType.POLYGON_SIZE: {
        'validator': PolygonSizeValidator(),
        'display_name': 'Polygon Size',
        'description': 'A polygon may not exceed the maximum allowed hectares',
    },
    ValidationType.ESTIMATED_AREA: {
        'validator': EstimatedAreaValidator(),
        'display_name': 'Estimated Area',
        'description': 'Mapped hectares must be close to the site and project goals',
    },
}

# ValidationType.DUPLICATE_GEOMETRY, OVERLAPPING and WITHIN_COUNTRY have
# criteria ids but no validator; resolving them raises UnknownValidationType.


def normalize_validation_type(validation_type) -> ValidationType:
    """Accept a ValidationType or its name; raise UnknownValidationType otherwise."""
    if isinstance(validation_type, ValidationType):
        return validation_type
    try:
        return ValidationType(str(validation_type).strip().upper())
    except ValueError:
        raise UnknownValidationType(validation_type) from None


def resolve(validation_type):
    """
    Look up the criteria id and validator for a validation type.

    Returns:
        Tuple[int, BaseValidator]

    Raises:
        UnknownValidationType: the type is unknown or has no implementation
    """
    normalized = normalize_validation_type(validation_type)
    criteria_id = CRITERIA_ID_BY_TYPE.get(normalized)
    entry = VALIDATION_REGISTRY.get(normalized)
    if criteria_id is None or entry is None:
        raise UnknownValidationType(normalized.value)
    return criteria_id, entry['validator']


def get_criteria_id(validation_type) -> int:
    normalized = normalize_validation_type(validation_type)
    if normalized not in CRITERIA_ID_BY_TYPE:
        raise UnknownValidationType(normalized.value)
    return CRITERIA_ID_BY_TYPE[normalized]


def get_validation_type(criteria_id):
    """ValidationType stored under a criteria id, or None for unknown ids."""
    return TYPE_BY_CRITERIA_ID.get(criteria_id)


def get_implemented_types():
    """Types with a registered validator, in registry order."""
    return list(VALIDATION_REGISTRY.keys())


def get_geometry_types():
    """Types whose validator can check unsaved geometries, in registry order."""
    return [
        validation_type
        for validation_type, entry in VALIDATION_REGISTRY.items()
        if entry['validator'].supports_geometry
    ]


def resolve_for_geometry(validation_type):
    """
    Like resolve(), for checks that run on unsaved geometries.

    Raises:
        UnknownValidationType: the type is unknown or has no implementation
        UnsupportedGeometryValidation: the check needs stored polygons
    """
    criteria_id, validator = resolve(validation_type)
    if not validator.supports_geometry:
        raise UnsupportedGeometryValidation(normalize_validation_type(validation_type).value)
    return criteria_id, validator
