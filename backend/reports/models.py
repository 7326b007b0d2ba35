"""
Reports app models.

A report ("pengaduan") is a citizen complaint about a public problem,
pinned to a location and backed by a photo.  Officers and admins move
it through ``pending → in_progress → resolved`` (or ``rejected``).
"""

from django.conf import settings
from django.db import models

from core.models import TimeStampedModel


# ────────────────────────────────────────────────────────────────────
# Choice enumerations
# ────────────────────────────────────────────────────────────────────

class ReportCategory(models.TextChoices):
    INFRASTRUCTURE = "infrastructure", "Infrastruktur"
    SANITATION = "sanitation", "Kebersihan"
    SECURITY = "security", "Keamanan"
    HEALTH = "health", "Kesehatan"
    EDUCATION = "education", "Pendidikan"
    OTHER = "other", "Lainnya"


class ReportStatus(models.TextChoices):
    """
    Lifecycle of a report.  ``resolved`` and ``rejected`` are final.
    """

    PENDING = "pending", "Menunggu"
    IN_PROGRESS = "in_progress", "Diproses"
    RESOLVED = "resolved", "Selesai"
    REJECTED = "rejected", "Ditolak"


# ────────────────────────────────────────────────────────────────────
# Models
# ────────────────────────────────────────────────────────────────────

class Report(TimeStampedModel):
    """
    A citizen complaint.

    * ``reporter``, the photo and the location are fixed at creation.
    * ``status``, ``response``, ``assignee`` and ``updated_at`` change
      only through ``reports.workflow.REPORT_ENGINE``.
    """

    reporter = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="reports",
        verbose_name="Reporter",
    )
    category = models.CharField(
        max_length=20,
        choices=ReportCategory.choices,
        verbose_name="Category",
        db_index=True,
    )
    title = models.CharField(
        max_length=255,
        verbose_name="Title",
    )
    description = models.TextField(
        verbose_name="Description",
    )
    photo_ref = models.CharField(
        max_length=500,
        verbose_name="Photo Reference",
        help_text="URL or storage key of the uploaded photo.",
    )
    latitude = models.FloatField(verbose_name="Latitude")
    longitude = models.FloatField(verbose_name="Longitude")
    address = models.CharField(
        max_length=500,
        verbose_name="Address",
    )
    status = models.CharField(
        max_length=20,
        choices=ReportStatus.choices,
        default=ReportStatus.PENDING,
        verbose_name="Status",
        db_index=True,
    )
    response = models.TextField(
        null=True,
        blank=True,
        verbose_name="Official Response",
    )
    assignee = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="assigned_reports",
        verbose_name="Assignee",
        help_text="Last officer or admin who changed the status.",
    )

    class Meta:
        verbose_name = "Report"
        verbose_name_plural = "Reports"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status", "category"], name="report_status_category_idx"),
        ]

    def __str__(self):
        return f"Report #{self.pk}: {self.title} [{self.get_status_display()}]"
