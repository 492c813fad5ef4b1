from django.db import models

from restoration.models.basemodel import BaseModel, generate_uuid


class PolygonGeometry(BaseModel):
    """Raw polygon geometry stored as a GeoJSON geometry object (WGS84)."""

    uuid = models.CharField(max_length=36, unique=True, default=generate_uuid, editable=False)
    geom = models.JSONField(help_text="GeoJSON Polygon or MultiPolygon geometry")

    class Meta:
        db_table = 'restoration_polygon_geometries'

    def __str__(self):
        return f"PolygonGeometry {self.uuid}"
