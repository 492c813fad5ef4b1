"""
Data completeness check: the descriptive fields of a polygon must be filled
in with acceptable values.

A missing field is reported with exists=False. A field that is filled in
but holds a value outside the allowed vocabulary, a non-positive tree count
or a malformed date is reported with exists=True.
"""
from datetime import date

from restoration.validation.base import BaseValidator, verdict

# Reported field name -> SitePolygon attribute
REQUIRED_FIELDS = {
    'poly_name': 'poly_name',
    'practice': 'practice',
    'target_sys': 'target_sys',
    'distr': 'distr',
    'num_trees': 'num_trees',
    'plantstart': 'plant_start',
}

# Reported field name -> camelCase GeoJSON property, which wins over the snake_case one
CAMEL_CASE_PROPERTIES = {
    'poly_name': 'polyName',
    'target_sys': 'targetSys',
    'num_trees': 'numTrees',
    'plantstart': 'plantStart',
}

VALID_PRACTICES = ['tree-planting', 'direct-seeding', 'assisted-natural-regeneration']

VALID_SYSTEMS = [
    'agroforest',
    'grassland',
    'natural-forest',
    'mangrove',
    'peatland',
    'riparian-area-or-wetland',
    'silvopasture',
    'woodlot-or-plantation',
    'urban-forest',
]

VALID_DISTRIBUTIONS = ['single-line', 'partial', 'full']

FIELD_REQUIRED = 'Field is required'


def is_missing(value) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ''
    if isinstance(value, (list, tuple, dict)):
        return len(value) == 0
    return False


def are_valid_items(value, valid_items) -> bool:
    items = value.split(',') if isinstance(value, str) else value
    return all(isinstance(item, str) and item.strip() in valid_items for item in items)


def is_valid_date(value) -> bool:
    if isinstance(value, date):
        return True
    if not isinstance(value, str):
        return False
    try:
        return date.fromisoformat(value).isoformat() == value
    except ValueError:
        return False


def is_positive_integer(value) -> bool:
    if isinstance(value, bool):
        return False
    try:
        number = float(value)
    except (TypeError, ValueError):
        return False
    return number.is_integer() and number > 0


def field_error(field, value):
    """Error message for a present field, or None when its value is acceptable."""
    if field == 'practice':
        if isinstance(value, (list, tuple)) and are_valid_items(value, VALID_PRACTICES):
            return None
        return f"Invalid practice. Must be one of: {', '.join(VALID_PRACTICES)}"
    if field == 'target_sys':
        if isinstance(value, str) and are_valid_items(value, VALID_SYSTEMS):
            return None
        return f"Invalid target system. Must be one of: {', '.join(VALID_SYSTEMS)}"
    if field == 'distr':
        if isinstance(value, (list, tuple)) and are_valid_items(value, VALID_DISTRIBUTIONS):
            return None
        return f"Invalid distribution. Must be one of: {', '.join(VALID_DISTRIBUTIONS)}"
    if field == 'num_trees':
        if is_positive_integer(value):
            return None
        return 'Invalid number of trees. Must be a valid integer and cannot be 0'
    if field == 'plantstart':
        if is_valid_date(value):
            return None
        return 'Invalid date format. Expected YYYY-MM-DD'
    return None


def check_fields(values):
    """
    Verdict for a mapping of reported field name -> value.

    extra_info is None when valid, else one {field, error, exists} entry per
    rejected field, in REQUIRED_FIELDS order.
    """
    errors = []
    for field in REQUIRED_FIELDS:
        value = values.get(field)
        if is_missing(value):
            errors.append({'field': field, 'error': FIELD_REQUIRED, 'exists': False})
            continue
        error = field_error(field, value)
        if error is not None:
            errors.append({'field': field, 'error': error, 'exists': True})
    return verdict(not errors, errors or None)


class DataCompletenessValidator(BaseValidator):
    supports_batch = True
    supports_geometry = True

    def validate_polygon(self, polygon_uuid):
        return self._check(self.site_store.site_polygon(polygon_uuid))

    def validate_polygons(self, polygon_uuids):
        polygon_uuids = list(polygon_uuids)
        site_polygons = self.site_store.site_polygons(polygon_uuids)
        return [
            {'polygon_uuid': polygon_uuid, **self._check(site_polygons[polygon_uuid])}
            for polygon_uuid in polygon_uuids
        ]

    def validate_geometry(self, geometry, properties=None):
        if properties is None:
            return verdict(False, [{'field': 'properties', 'error': 'Feature properties are required', 'exists': False}])

        values = {}
        for field in REQUIRED_FIELDS:
            camel_case = CAMEL_CASE_PROPERTIES.get(field)
            if camel_case is not None and properties.get(camel_case) is not None:
                values[field] = properties[camel_case]
            else:
                values[field] = properties.get(field)
        return check_fields(values)

    def _check(self, site_polygon):
        return check_fields({
            field: getattr(site_polygon, attribute)
            for field, attribute in REQUIRED_FIELDS.items()
        })
