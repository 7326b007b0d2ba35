"""
Reports app serializers.

Serializers handle field definitions, read/write constraints, and field-level
/ object-level validation only.  **No workflow transitions or permission
checks live here**; those belong in ``services.py``.

Structure
---------
1. Filter / query-param serializers
2. Report read serializers (list, detail)
3. Report write serializers (create)
4. Workflow action serializers (transition)
"""

from __future__ import annotations

from rest_framework import serializers

from core.constants import LATITUDE_RANGE, LONGITUDE_RANGE
from core.domain.filtering import ALL, ORDER_NEWEST, ORDERINGS

from .models import Report, ReportCategory, ReportStatus
from .services import ReportWorkflowService


# ═══════════════════════════════════════════════════════════════════
#  1. Filter / Query-Parameter Serializers
# ═══════════════════════════════════════════════════════════════════


class ReportFilterSerializer(serializers.Serializer):
    """
    Validates and cleans query-parameter filters for ``GET /api/reports/``.

    Query Parameters
    ----------------
    ``status``   : str — a ``ReportStatus`` value or ``all``
    ``category`` : str — a ``ReportCategory`` value or ``all``
    ``search``   : str — free text against title, description and category
    ``ordering`` : str — ``newest`` (default) or ``oldest``
    """

    status = serializers.ChoiceField(
        choices=[ALL, *ReportStatus.values],
        default=ALL,
    )
    category = serializers.ChoiceField(
        choices=[ALL, *ReportCategory.values],
        default=ALL,
    )
    search = serializers.CharField(
        max_length=255,
        allow_blank=True,
        default="",
        help_text="Case-insensitive search on title, description and category.",
    )
    ordering = serializers.ChoiceField(
        choices=list(ORDERINGS),
        default=ORDER_NEWEST,
    )


# ═══════════════════════════════════════════════════════════════════
#  2. Report Read Serializers
# ═══════════════════════════════════════════════════════════════════


class ReportListSerializer(serializers.ModelSerializer):
    """Compact representation for the list endpoint."""

    status_display = serializers.CharField(source="get_status_display", read_only=True)
    category_display = serializers.CharField(source="get_category_display", read_only=True)
    reporter_name = serializers.CharField(source="reporter.full_name", read_only=True)

    class Meta:
        model = Report
        fields = [
            "id",
            "title",
            "category",
            "category_display",
            "status",
            "status_display",
            "photo_ref",
            "address",
            "reporter",
            "reporter_name",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ReportDetailSerializer(serializers.ModelSerializer):
    """
    Full report representation.

    ``allowed_transitions`` lists the target statuses the requesting user
    may choose right now (empty for citizens and for final statuses).
    """

    status_display = serializers.CharField(source="get_status_display", read_only=True)
    category_display = serializers.CharField(source="get_category_display", read_only=True)
    reporter_name = serializers.CharField(source="reporter.full_name", read_only=True)
    assignee_name = serializers.SerializerMethodField()
    allowed_transitions = serializers.SerializerMethodField()

    class Meta:
        model = Report
        fields = [
            "id",
            "title",
            "description",
            "category",
            "category_display",
            "status",
            "status_display",
            "photo_ref",
            "latitude",
            "longitude",
            "address",
            "response",
            "reporter",
            "reporter_name",
            "assignee",
            "assignee_name",
            "allowed_transitions",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_assignee_name(self, obj: Report) -> str | None:
        if obj.assignee_id is None:
            return None
        return obj.assignee.full_name

    def get_allowed_transitions(self, obj: Report) -> list[str]:
        request = self.context.get("request")
        if request is None or not request.user.is_authenticated:
            return []
        return ReportWorkflowService.get_available_transitions(obj, request.user)


# ═══════════════════════════════════════════════════════════════════
#  3. Report Write Serializers
# ═══════════════════════════════════════════════════════════════════


class ReportCreateSerializer(serializers.ModelSerializer):
    """
    Request body for ``POST /api/reports/``.

    Status, response and assignee are not accepted; the service sets them.
    """

    latitude = serializers.FloatField(
        min_value=LATITUDE_RANGE[0],
        max_value=LATITUDE_RANGE[1],
    )
    longitude = serializers.FloatField(
        min_value=LONGITUDE_RANGE[0],
        max_value=LONGITUDE_RANGE[1],
    )

    class Meta:
        model = Report
        fields = [
            "title",
            "description",
            "category",
            "photo_ref",
            "latitude",
            "longitude",
            "address",
        ]
        extra_kwargs = {
            "photo_ref": {"allow_blank": False},
            "address": {"allow_blank": False},
        }


# ═══════════════════════════════════════════════════════════════════
#  4. Workflow Action Serializers
# ═══════════════════════════════════════════════════════════════════


class ReportTransitionSerializer(serializers.Serializer):
    """
    Request body for ``POST /api/reports/{id}/transition/``.

    Only the target's *shape* is validated here; whether the move is
    allowed is decided by the workflow engine.
    """

    status = serializers.ChoiceField(
        choices=ReportStatus.choices,
        help_text="Target status.",
    )
    response = serializers.CharField(
        allow_blank=True,
        allow_null=True,
        default=None,
        help_text=(
            "Official response.  At least 10 characters when the report "
            "leaves 'pending' or is resolved / rejected."
        ),
    )
