"""
Core app services — **Service Layer**.

Cross-app, read-only helpers.  Views delegate to the service classes
defined here, keeping views thin.

Models and engines from the entity apps are imported inside the methods
that need them so that ``core`` never imports them at module load time
(the entity apps import ``core`` themselves).
"""

from __future__ import annotations

from typing import Any


# ════════════════════════════════════════════════════════════════════
#  System Constants Service
# ════════════════════════════════════════════════════════════════════

class SystemConstantsService:
    """
    Gathers all system-wide choice enumerations and the two workflow
    tables into a single dict for the frontend.

    This service is **stateless**: it does not depend on the requesting
    user.  All constants are public information needed by clients to
    render dropdowns, labels and status buttons.
    """

    @staticmethod
    def get_constants() -> dict[str, Any]:
        """Return all system constants as a dict."""
        from core.constants import (
            REPORT_RESPONSE_MIN_LENGTH,
            SUGGESTION_DESCRIPTION_MIN_LENGTH,
            SUGGESTION_RESPONSE_MIN_LENGTH,
        )
        from core.domain.access import Role
        from reports.models import ReportCategory, ReportStatus
        from reports.workflow import REPORT_ENGINE
        from suggestions.models import SuggestionCategory, SuggestionStatus
        from suggestions.workflow import SUGGESTION_ENGINE

        to_list = SystemConstantsService._choices_to_list
        workflow = SystemConstantsService._workflow_to_dict

        return {
            "roles": to_list(Role),
            "report_categories": to_list(ReportCategory),
            "report_statuses": to_list(ReportStatus),
            "suggestion_categories": to_list(SuggestionCategory),
            "suggestion_statuses": to_list(SuggestionStatus),
            "report_workflow": workflow(REPORT_ENGINE),
            "suggestion_workflow": workflow(SUGGESTION_ENGINE),
            "limits": {
                "report_response_min_length": REPORT_RESPONSE_MIN_LENGTH,
                "suggestion_response_min_length": SUGGESTION_RESPONSE_MIN_LENGTH,
                "suggestion_description_min_length": SUGGESTION_DESCRIPTION_MIN_LENGTH,
            },
        }

    @staticmethod
    def _choices_to_list(
        choices_class: type,
    ) -> list[dict[str, str]]:
        """
        Convert a Django ``TextChoices`` class to a list of
        ``{"value": ..., "label": ...}`` dicts.
        """
        return [
            {"value": str(value), "label": str(label)}
            for value, label in choices_class.choices
        ]

    @staticmethod
    def _workflow_to_dict(engine: Any) -> list[dict[str, Any]]:
        """One ``{"status", "allowed_next", "is_terminal"}`` row per state."""
        return [
            {
                "status": state,
                "allowed_next": engine.allowed_targets(state),
                "is_terminal": engine.is_terminal(state),
            }
            for state in engine.rules.states
        ]
