from django.db import models

from restoration.models.basemodel import BaseModel, generate_uuid


class Site(BaseModel):
    uuid = models.CharField(max_length=36, unique=True, default=generate_uuid, editable=False)
    name = models.CharField(max_length=255)
    project = models.ForeignKey(
        'Project',
        on_delete=models.CASCADE,
        related_name='sites',
    )
    start_date = models.DateField(null=True, blank=True)
    hectares_to_restore_goal = models.FloatField(null=True, blank=True)

    class Meta:
        db_table = 'restoration_sites'
        ordering = ['name']

    def __str__(self):
        return f"{self.name} ({self.uuid})"
