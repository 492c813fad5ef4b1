from django.db import models

from restoration.models.basemodel import BaseModel, generate_uuid


class Project(BaseModel):
    """Restoration project grouping one or more sites."""

    uuid = models.CharField(max_length=36, unique=True, default=generate_uuid, editable=False)
    name = models.CharField(max_length=255)
    total_hectares_restored_goal = models.FloatField(
        null=True,
        blank=True,
        help_text="Hectares the project commits to restore across all sites",
    )

    class Meta:
        db_table = 'restoration_projects'
        ordering = ['name']

    def __str__(self):
        return self.name
