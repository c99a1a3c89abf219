from datetime import datetime
from typing import Optional

from django.db import models
from django.utils import timezone


class SoftDeleteModel(models.Model):
    """Abstract base for records that are flagged as deleted instead of removed.

    ``deleted`` and ``deleted_on`` move together: ``deleted_on`` is set iff
    ``deleted`` is true. Rows are never physically removed.
    """

    deleted = models.BooleanField(default=False)
    deleted_on = models.DateTimeField(null=True, blank=True, default=None)

    class Meta:
        abstract = True

    def mark_deleted(self, when: Optional[datetime] = None) -> None:
        """Flip the record to the deleted state in memory. Callers persist it."""
        self.deleted_on = when or timezone.now()
        self.deleted = True
