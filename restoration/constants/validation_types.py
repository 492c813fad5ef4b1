"""
Validation type and criteria id constants.
Criteria ids are stored with every result, so an id is never reassigned.
"""
from enum import Enum


class ValidationType(str, Enum):
    OVERLAPPING = "OVERLAPPING"
    SELF_INTERSECTION = "SELF_INTERSECTION"
    POLYGON_SIZE = "POLYGON_SIZE"
    WITHIN_COUNTRY = "WITHIN_COUNTRY"
    SPIKES = "SPIKES"
    ESTIMATED_AREA = "ESTIMATED_AREA"
    DATA_COMPLETENESS = "DATA_COMPLETENESS"
    PLANT_START_DATE = "PLANT_START_DATE"
    DUPLICATE_GEOMETRY = "DUPLICATE_GEOMETRY"


CRITERIA_ID_BY_TYPE = {
    ValidationType.OVERLAPPING: 3,
    ValidationType.SELF_INTERSECTION: 4,
    ValidationType.POLYGON_SIZE: 6,
    ValidationType.WITHIN_COUNTRY: 7,
    ValidationType.SPIKES: 8,
    ValidationType.ESTIMATED_AREA: 12,
    ValidationType.DATA_COMPLETENESS: 14,
    ValidationType.PLANT_START_DATE: 15,
    ValidationType.DUPLICATE_GEOMETRY: 16,
}

TYPE_BY_CRITERIA_ID = {criteria_id: validation_type for validation_type, criteria_id in CRITERIA_ID_BY_TYPE.items()}


class JobStatus:
    PENDING = "pending"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    CHOICES = [
        (PENDING, "Pending"),
        (RUNNING, "Running"),
        (SUCCEEDED, "Succeeded"),
        (FAILED, "Failed"),
    ]

    @classmethod
    def terminal(cls):
        return (cls.SUCCEEDED, cls.FAILED)
