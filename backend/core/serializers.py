"""
Core app serializers.

Response serializers for the cross-app ``/api/core/`` endpoints.  They
only shape service output; no queries happen here.
"""

from __future__ import annotations

from rest_framework import serializers


# ════════════════════════════════════════════════════════════════════
#  System Constants / Enums
# ════════════════════════════════════════════════════════════════════

class ChoiceItemSerializer(serializers.Serializer):
    """
    A single key-label pair representing one choice/enum option.

    Example::

        {"value": "in_progress", "label": "Diproses"}
    """

    value = serializers.CharField(
        help_text="Machine-readable value to send in API requests.",
    )
    label = serializers.CharField(
        help_text="Human-readable display label for the UI.",
    )


class WorkflowStateSerializer(serializers.Serializer):
    """
    One row of a status-transition table.

    Example::

        {"status": "pending", "allowed_next": ["in_progress", "rejected"],
         "is_terminal": false}
    """

    status = serializers.CharField()
    allowed_next = serializers.ListField(child=serializers.CharField())
    is_terminal = serializers.BooleanField()


class LimitsSerializer(serializers.Serializer):
    report_response_min_length = serializers.IntegerField()
    suggestion_response_min_length = serializers.IntegerField()
    suggestion_description_min_length = serializers.IntegerField()


class SystemConstantsSerializer(serializers.Serializer):
    """
    Top-level response serializer for ``GET /api/core/constants/``.

    Provides all system-wide choice enumerations and both workflow
    tables so clients can build dropdowns, filters, labels and status
    buttons **without** hardcoding values.
    """

    roles = ChoiceItemSerializer(many=True)
    report_categories = ChoiceItemSerializer(many=True)
    report_statuses = ChoiceItemSerializer(many=True)
    suggestion_categories = ChoiceItemSerializer(many=True)
    suggestion_statuses = ChoiceItemSerializer(many=True)
    report_workflow = WorkflowStateSerializer(many=True)
    suggestion_workflow = WorkflowStateSerializer(many=True)
    limits = LimitsSerializer()
