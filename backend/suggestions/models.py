"""
Suggestions app models.

A suggestion ("aspirasi") is a citizen's proposal for public policy or
services.  Only admins decide on it: ``pending → approved | rejected``.
"""

from django.conf import settings
from django.db import models

from core.models import CreatedAtModel


class SuggestionCategory(models.TextChoices):
    DEVELOPMENT = "development", "Pembangunan"
    PUBLIC_SERVICE = "public_service", "Layanan Publik"
    POLICY = "policy", "Kebijakan"
    ECONOMY = "economy", "Ekonomi"
    SOCIAL = "social", "Sosial"
    OTHER = "other", "Lainnya"


class SuggestionStatus(models.TextChoices):
    PENDING = "pending", "Menunggu"
    APPROVED = "approved", "Disetujui"
    REJECTED = "rejected", "Ditolak"


class Suggestion(CreatedAtModel):
    """
    A citizen suggestion.  Has no assignee and no ``updated_at``; the
    admin's decision is recorded in ``status`` and ``response`` only.
    """

    submitter = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="suggestions",
        verbose_name="Submitter",
    )
    category = models.CharField(
        max_length=20,
        choices=SuggestionCategory.choices,
        verbose_name="Category",
        db_index=True,
    )
    title = models.CharField(max_length=255, verbose_name="Title")
    description = models.TextField(verbose_name="Description")
    status = models.CharField(
        max_length=20,
        choices=SuggestionStatus.choices,
        default=SuggestionStatus.PENDING,
        verbose_name="Status",
        db_index=True,
    )
    response = models.TextField(
        null=True,
        blank=True,
        verbose_name="Official Response",
    )

    class Meta:
        verbose_name = "Suggestion"
        verbose_name_plural = "Suggestions"
        ordering = ["-created_at"]

    def __str__(self):
        return f"Suggestion #{self.pk}: {self.title} [{self.get_status_display()}]"
