from django.db import models
from django.utils import timezone


class SoftDeletableQuerySet(models.QuerySet):
    """Custom QuerySet that filters out soft-deleted records by default."""

    def active(self):
        """Return only non-deleted records."""
        return self.filter(deleted_at__isnull=True)

    def delete(self):
        """Soft delete all records in the queryset."""
        return self.update(deleted_at=timezone.now())


class SoftDeletableManager(models.Manager):
    """Manager that hides soft-deleted records."""

    def get_queryset(self):
        return SoftDeletableQuerySet(self.model, using=self._db).active()


class SoftDeletableModel(models.Model):
    deleted_at = models.DateTimeField(null=True, blank=True)

    objects = SoftDeletableManager()

    class Meta:
        abstract = True

    def delete(self, using=None, keep_parents=False):
        self.deleted_at = timezone.now()
        self.save(update_fields=['deleted_at'])
