"""
Suggestions app Service Layer.

Architecture
------------
- ``SuggestionQueryService``     — Role-scoped listing and lookup.
- ``SuggestionCreationService``  — Citizen submission.
- ``SuggestionWorkflowService``  — Admin decisions through ``SUGGESTION_ENGINE``.
"""

from __future__ import annotations

import logging
from typing import Any

from django.db import transaction
from django.db.models import QuerySet

from core.domain.access import Action, EntityType, apply_role_scope, require_capability
from core.domain.exceptions import NotFound
from core.domain.filtering import apply_filters
from core.domain.transactions import apply_mutations, lock_for_update
from core.domain.workflow import Actor

from .models import Suggestion, SuggestionStatus
from .workflow import SUGGESTION_ENGINE

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════
#  Suggestion Query Service
# ═══════════════════════════════════════════════════════════════════


class SuggestionQueryService:

    @staticmethod
    def get_scoped_queryset(requesting_user: Any) -> QuerySet:
        return apply_role_scope(
            Suggestion.objects.select_related("submitter"),
            requesting_user,
            entity_type=EntityType.SUGGESTION,
            owner_field="submitter",
        )

    @staticmethod
    def get_filtered_list(
        requesting_user: Any,
        filters: dict[str, Any],
    ) -> list[Suggestion]:
        """
        Visible suggestions filtered by ``status`` and ``search``, sorted
        by ``ordering``.  The suggestion list has no category filter.
        """
        suggestions = SuggestionQueryService.get_scoped_queryset(requesting_user)
        return apply_filters(
            suggestions,
            status=filters.get("status", "all"),
            query=filters.get("search", ""),
            order=filters.get("ordering", "newest"),
        )

    @staticmethod
    def get_suggestion_detail(suggestion_id: int, requesting_user: Any) -> Suggestion:
        try:
            return (
                SuggestionQueryService.get_scoped_queryset(requesting_user)
                .get(pk=suggestion_id)
            )
        except Suggestion.DoesNotExist:
            raise NotFound(f"Suggestion with id {suggestion_id} not found.")


# ═══════════════════════════════════════════════════════════════════
#  Suggestion Creation Service
# ═══════════════════════════════════════════════════════════════════


class SuggestionCreationService:

    @staticmethod
    @transaction.atomic
    def create_suggestion(validated_data: dict[str, Any], requesting_user: Any) -> Suggestion:
        """
        Create a ``pending`` suggestion owned by ``requesting_user``.

        Raises
        ------
        PermissionDenied
            The user's role may not create suggestions.
        """
        require_capability(
            requesting_user,
            EntityType.SUGGESTION,
            Action.CREATE,
            message="Only citizens can submit suggestions.",
        )
        suggestion = Suggestion.objects.create(
            submitter=requesting_user,
            status=SuggestionStatus.PENDING,
            response=None,
            **validated_data,
        )
        logger.info(
            "Suggestion #%s created by user #%s (category=%s).",
            suggestion.pk, requesting_user.pk, suggestion.category,
        )
        return suggestion


# ═══════════════════════════════════════════════════════════════════
#  Suggestion Workflow Service
# ═══════════════════════════════════════════════════════════════════


class SuggestionWorkflowService:

    @staticmethod
    @transaction.atomic
    def transition(
        suggestion_id: int,
        target_status: str,
        requesting_user: Any,
        response_text: str | None = None,
    ) -> Suggestion:
        """
        Approve or reject a suggestion.

        Parameters
        ----------
        suggestion_id : int
            PK of the suggestion.
        target_status : str
            A ``SuggestionStatus`` value.
        requesting_user : User
            Must be an admin.
        response_text : str | None
            Required (non-empty after trimming) for approve / reject.

        Raises
        ------
        NotFound, PermissionDenied, TerminalState, InvalidTransition,
        ResponseRequired
        """
        require_capability(
            requesting_user, EntityType.SUGGESTION, Action.TRANSITION,
            message="Only admins can decide on suggestions.",
        )
        suggestion = lock_for_update(Suggestion, suggestion_id)
        previous = suggestion.status

        result = SUGGESTION_ENGINE.request_transition(
            suggestion,
            Actor.from_user(requesting_user),
            target_status,
            response_text,
        )
        result.raise_for_rejection()
        apply_mutations(suggestion, result.mutations)

        logger.info(
            "Suggestion #%s: %s → %s by user #%s.",
            suggestion.pk, previous, suggestion.status, requesting_user.pk,
        )
        return suggestion

    @staticmethod
    def get_available_transitions(suggestion: Suggestion, requesting_user: Any) -> list[str]:
        return SUGGESTION_ENGINE.available_actions(
            suggestion, Actor.from_user(requesting_user),
        )
