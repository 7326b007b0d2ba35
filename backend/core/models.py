"""
Core app models.

Provides abstract base models shared by the report and suggestion apps.
"""

from django.db import models
from django.utils import timezone


class CreatedAtModel(models.Model):
    """
    Abstract base model with an immutable ``created_at`` timestamp.
    """

    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name="Created At",
    )

    class Meta:
        abstract = True


class TimeStampedModel(CreatedAtModel):
    """
    Adds ``updated_at``.

    Unlike ``auto_now`` this column is written only by status
    transitions, so it records the last triage action rather than any
    incidental save.
    """

    updated_at = models.DateTimeField(
        default=timezone.now,
        verbose_name="Updated At",
    )

    class Meta:
        abstract = True
