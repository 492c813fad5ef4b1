from django.db import models

from restoration.models.basemodel import BaseModel, generate_uuid


class SitePolygon(BaseModel):
    """
    Metadata submitted for a polygon of a site.

    A polygon may have several versions; only the active version takes part
    in validation and area totals.
    """

    uuid = models.CharField(max_length=36, unique=True, default=generate_uuid, editable=False)
    polygon_uuid = models.CharField(max_length=36, db_index=True, help_text="UUID of the PolygonGeometry")
    site = models.ForeignKey(
        'Site',
        on_delete=models.CASCADE,
        related_name='site_polygons',
    )

    poly_name = models.CharField(max_length=255, null=True, blank=True)
    practice = models.JSONField(null=True, blank=True)
    target_sys = models.CharField(max_length=255, null=True, blank=True)
    distr = models.JSONField(null=True, blank=True)
    num_trees = models.IntegerField(null=True, blank=True)
    plant_start = models.DateField(null=True, blank=True)
    calc_area = models.FloatField(null=True, blank=True, help_text="Area in hectares")

    STATUS_CHOICES = [
        ('draft', 'Draft'),
        ('submitted', 'Submitted'),
        ('needs-more-information', 'Needs More Information'),
        ('approved', 'Approved'),
    ]
    status = models.CharField(max_length=50, choices=STATUS_CHOICES, default='draft')
    is_active = models.BooleanField(default=True, db_index=True)

    class Meta:
        db_table = 'restoration_site_polygons'
        ordering = ['id']
        indexes = [
            models.Index(fields=['site', 'is_active'], name='site_polygon_site_active_idx'),
        ]

    def __str__(self):
        return f"SitePolygon {self.poly_name or self.uuid} ({self.polygon_uuid})"
