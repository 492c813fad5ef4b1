"""
Validation result models.

CriteriaSite holds the latest outcome of one check for one polygon.
Whenever a newer outcome replaces it, the previous values are copied into
CriteriaSiteHistoric first, so the history is append-only.
"""
from django.db import models
from django.utils import timezone


class CriteriaSite(models.Model):
    polygon_uuid = models.CharField(max_length=36, db_index=True)
    criteria_id = models.PositiveSmallIntegerField()
    valid = models.BooleanField()
    extra_info = models.JSONField(null=True, blank=True)
    # Time of the last write, refreshed every time the check runs
    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        db_table = 'restoration_criteria_site'
        ordering = ['-created_at', '-id']
        constraints = [
            models.UniqueConstraint(
                fields=['polygon_uuid', 'criteria_id'],
                name='unique_current_criteria_per_polygon',
            ),
        ]

    def __str__(self):
        return f"CriteriaSite {self.polygon_uuid} #{self.criteria_id} ({'valid' if self.valid else 'invalid'})"

    def to_dict(self):
        return {
            'criteriaId': self.criteria_id,
            'valid': self.valid,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'extraInfo': self.extra_info,
        }


class CriteriaSiteHistoric(models.Model):
    polygon_uuid = models.CharField(max_length=36, db_index=True)
    criteria_id = models.PositiveSmallIntegerField()
    valid = models.BooleanField()
    extra_info = models.JSONField(null=True, blank=True)
    # Timestamp of the superseded current row
    created_at = models.DateTimeField()
    superseded_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'restoration_criteria_site_historic'
        ordering = ['-superseded_at', '-id']
        indexes = [
            models.Index(fields=['polygon_uuid', 'criteria_id'], name='criteria_hist_poly_crit_idx'),
        ]

    def __str__(self):
        return f"CriteriaSiteHistoric {self.polygon_uuid} #{self.criteria_id} @ {self.created_at}"

    def to_dict(self):
        return {
            'criteriaId': self.criteria_id,
            'valid': self.valid,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'supersededAt': self.superseded_at.isoformat() if self.superseded_at else None,
            'extraInfo': self.extra_info,
        }
