"""
Suggestions app serializers.

Field definitions and input validation only; decisions are made by
``SuggestionWorkflowService``.
"""

from __future__ import annotations

from rest_framework import serializers

from core.constants import SUGGESTION_DESCRIPTION_MIN_LENGTH
from core.domain.filtering import ALL, ORDER_NEWEST, ORDERINGS

from .models import Suggestion, SuggestionStatus
from .services import SuggestionWorkflowService


class SuggestionFilterSerializer(serializers.Serializer):
    """
    Query parameters for ``GET /api/suggestions/``: ``status``,
    ``search`` and ``ordering``.
    """

    status = serializers.ChoiceField(
        choices=[ALL, *SuggestionStatus.values],
        default=ALL,
    )
    search = serializers.CharField(
        max_length=255,
        allow_blank=True,
        default="",
    )
    ordering = serializers.ChoiceField(
        choices=list(ORDERINGS),
        default=ORDER_NEWEST,
    )


class SuggestionListSerializer(serializers.ModelSerializer):

    status_display = serializers.CharField(source="get_status_display", read_only=True)
    category_display = serializers.CharField(source="get_category_display", read_only=True)
    submitter_name = serializers.CharField(source="submitter.full_name", read_only=True)

    class Meta:
        model = Suggestion
        fields = [
            "id",
            "title",
            "category",
            "category_display",
            "status",
            "status_display",
            "submitter",
            "submitter_name",
            "created_at",
        ]
        read_only_fields = fields


class SuggestionDetailSerializer(serializers.ModelSerializer):

    status_display = serializers.CharField(source="get_status_display", read_only=True)
    category_display = serializers.CharField(source="get_category_display", read_only=True)
    submitter_name = serializers.CharField(source="submitter.full_name", read_only=True)
    allowed_transitions = serializers.SerializerMethodField()

    class Meta:
        model = Suggestion
        fields = [
            "id",
            "title",
            "description",
            "category",
            "category_display",
            "status",
            "status_display",
            "response",
            "submitter",
            "submitter_name",
            "allowed_transitions",
            "created_at",
        ]
        read_only_fields = fields

    def get_allowed_transitions(self, obj: Suggestion) -> list[str]:
        request = self.context.get("request")
        if request is None or not request.user.is_authenticated:
            return []
        return SuggestionWorkflowService.get_available_transitions(obj, request.user)


class SuggestionCreateSerializer(serializers.ModelSerializer):
    """Request body for ``POST /api/suggestions/``."""

    description = serializers.CharField(
        min_length=SUGGESTION_DESCRIPTION_MIN_LENGTH,
        help_text=f"At least {SUGGESTION_DESCRIPTION_MIN_LENGTH} characters.",
    )

    class Meta:
        model = Suggestion
        fields = ["title", "description", "category"]


class SuggestionTransitionSerializer(serializers.Serializer):
    """Request body for ``POST /api/suggestions/{id}/transition/``."""

    status = serializers.ChoiceField(choices=SuggestionStatus.choices)
    response = serializers.CharField(
        allow_blank=True,
        allow_null=True,
        default=None,
        help_text="Official response; required when approving or rejecting.",
    )
