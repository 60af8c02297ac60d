"""
Core base model mixins.

  UUIDModel         : UUID primary key
  TimestampedModel  : created_at / updated_at
  CatalogModel      : UUID + timestamps + soft delete + is_active flag,
                      used by barbershops and services
"""
import uuid
from django.db import models
from django.utils import timezone


class UUIDModel(models.Model):
    """Primary key is a UUID, not an auto-incrementing integer."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    class Meta:
        abstract = True


class TimestampedModel(models.Model):
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class CatalogQuerySet(models.QuerySet):
    def alive(self):
        return self.filter(deleted_at__isnull=True)

    def active(self):
        """Visible to customers: not soft-deleted and switched on."""
        return self.alive().filter(is_active=True)

    def delete(self):
        return self.update(deleted_at=timezone.now())


class CatalogManager(models.Manager):
    def get_queryset(self):
        return CatalogQuerySet(self.model, using=self._db).alive()

    def active(self):
        return self.get_queryset().active()


class CatalogModel(UUIDModel, TimestampedModel):
    """
    Soft-deletable catalog entry. Rows are never physically removed by
    .delete(); bookings keep pointing at them for history.
    Default manager hides soft-deleted rows; `all_objects` does not.
    """
    is_active = models.BooleanField(default=True, db_index=True)
    deleted_at = models.DateTimeField(null=True, blank=True, db_index=True)

    objects = CatalogManager()
    all_objects = models.Manager()

    class Meta:
        abstract = True

    def delete(self, *args, **kwargs):
        self.deleted_at = timezone.now()
        self.save(update_fields=['deleted_at'])

