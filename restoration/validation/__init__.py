"""
Polygon validation package.

Key Components:
- BaseValidator: Base class for all polygon checks
- VALIDATION_REGISTRY: Implemented checks keyed by ValidationType
- resolve(): ValidationType -> (criteria id, validator)
"""

from restoration.validation.base import BaseValidator
from restoration.validation.registry import VALIDATION_REGISTRY, get_implemented_types, resolve

__all__ = [
    'BaseValidator',
    'VALIDATION_REGISTRY',
    'get_implemented_types',
    'resolve',
]
