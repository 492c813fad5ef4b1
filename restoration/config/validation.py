"""
Accessors for the polygon validation tunables.

Values come from settings.POLYGON_VALIDATION, which is built from
config/application.yml and VALIDATION_* environment variables.
"""
from datetime import date

from django.conf import settings


DEFAULT_VALIDATION_CONFIG = {
    'CHUNK_SIZE': 50,
    'MAX_PAGE_SIZE': 1000,
    'MAX_POLYGON_HECTARES': 1000,
    'AREA_LOWER_BOUND_MULTIPLIER': 0.75,
    'AREA_UPPER_BOUND_MULTIPLIER': 1.25,
    'MIN_PLANT_START_DATE': '2018-01-01',
    'SPIKE_ANGLE_THRESHOLD': 5.0,
}


def get_validation_config():
    """Return the effective validation configuration."""
    config = dict(DEFAULT_VALIDATION_CONFIG)
    config.update(getattr(settings, 'POLYGON_VALIDATION', {}) or {})
    return config


def get_validation_setting(name):
    return get_validation_config()[name]


def get_min_plant_start_date() -> date:
    value = get_validation_setting('MIN_PLANT_START_DATE')
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))
