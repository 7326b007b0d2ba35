"""
Reports app Service Layer.

This module is the **single source of truth** for all business logic
in the ``reports`` app.  Views must remain thin: validate input via
serializers, call a service method, and return the result wrapped in
a DRF ``Response``.

Architecture
------------
- ``ReportQueryService``      — Role-scoped listing, filtering and lookup.
- ``ReportCreationService``   — Citizen report submission.
- ``ReportWorkflowService``   — Status transitions through ``REPORT_ENGINE``.
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

from .models import Report, ReportStatus
from .workflow import REPORT_ENGINE

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════
#  Report Query Service
# ═══════════════════════════════════════════════════════════════════


class ReportQueryService:
    """
    Builds the role-scoped report list and resolves single reports.

    Citizens see their own reports; officers and admins see every report.
    """

    @staticmethod
    def get_scoped_queryset(requesting_user: Any) -> QuerySet:
        return apply_role_scope(
            Report.objects.select_related("reporter", "assignee"),
            requesting_user,
            entity_type=EntityType.REPORT,
            owner_field="reporter",
        )

    @staticmethod
    def get_filtered_list(
        requesting_user: Any,
        filters: dict[str, Any],
    ) -> list[Report]:
        """
        Return the reports visible to ``requesting_user`` after the list
        filters have been applied.

        Parameters
        ----------
        requesting_user : User
            From ``request.user``.
        filters : dict
            Cleaned data from ``ReportFilterSerializer``.  Supported keys:
            ``status``, ``category`` (``"all"`` disables),
            ``search`` (free text) and ``ordering`` (``newest`` / ``oldest``).

        Returns
        -------
        list[Report]
            A new list; the scoped queryset is evaluated once.
        """
        reports = ReportQueryService.get_scoped_queryset(requesting_user)
        return apply_filters(
            reports,
            status=filters.get("status", "all"),
            category=filters.get("category", "all"),
            query=filters.get("search", ""),
            order=filters.get("ordering", "newest"),
        )

    @staticmethod
    def get_report_detail(report_id: int, requesting_user: Any) -> Report:
        """
        Raises
        ------
        NotFound
            The report does not exist or is outside the user's scope.
        """
        try:
            return ReportQueryService.get_scoped_queryset(requesting_user).get(pk=report_id)
        except Report.DoesNotExist:
            raise NotFound(f"Report with id {report_id} not found.")


# ═══════════════════════════════════════════════════════════════════
#  Report Creation Service
# ═══════════════════════════════════════════════════════════════════


class ReportCreationService:

    @staticmethod
    @transaction.atomic
    def create_report(validated_data: dict[str, Any], requesting_user: Any) -> Report:
        """
        Create a new report owned by ``requesting_user``.

        The report always starts at ``pending`` with no response and no
        assignee, whatever the payload says.

        Parameters
        ----------
        validated_data : dict
            Cleaned data from ``ReportCreateSerializer``: ``title``,
            ``description``, ``category``, ``photo_ref``, ``latitude``,
            ``longitude``, ``address``.
        requesting_user : User
            Must be a citizen.

        Raises
        ------
        PermissionDenied
            The user's role may not create reports.
        """
        require_capability(
            requesting_user,
            EntityType.REPORT,
            Action.CREATE,
            message="Only citizens can submit reports.",
        )
        report = Report.objects.create(
            reporter=requesting_user,
            status=ReportStatus.PENDING,
            response=None,
            assignee=None,
            **validated_data,
        )
        logger.info(
            "Report #%s created by user #%s (category=%s).",
            report.pk, requesting_user.pk, report.category,
        )
        return report


# ═══════════════════════════════════════════════════════════════════
#  Report Workflow Service
# ═══════════════════════════════════════════════════════════════════


class ReportWorkflowService:
    """
    Applies officer/admin status changes.

    The row is re-read under ``select_for_update`` so the engine always
    validates against the stored status, not a stale client copy.
    """

    @staticmethod
    @transaction.atomic
    def transition(
        report_id: int,
        target_status: str,
        requesting_user: Any,
        response_text: str | None = None,
    ) -> Report:
        """
        Move a report to ``target_status``.

        Parameters
        ----------
        report_id : int
            PK of the report.
        target_status : str
            A ``ReportStatus`` value.
        requesting_user : User
            Officer or admin performing the change.
        response_text : str | None
            Official response; at least 10 characters (trimmed) when the
            report leaves ``pending`` or is closed.

        Returns
        -------
        Report
            The updated report.

        Raises
        ------
        NotFound
            No report with that id.
        PermissionDenied
            The user's role may not transition reports.
        TerminalState
            The report is already resolved or rejected.
        InvalidTransition
            The target is not reachable from the current status.
        ResponseRequired
            The response is missing or too short.
        """
        # Before the lookup: callers without the capability get 403 for any id.
        require_capability(
            requesting_user, EntityType.REPORT, Action.TRANSITION,
            message="Only officers and admins can change a report's status.",
        )
        report = lock_for_update(Report, report_id)
        previous = report.status

        result = REPORT_ENGINE.request_transition(
            report,
            Actor.from_user(requesting_user),
            target_status,
            response_text,
        )
        result.raise_for_rejection()
        apply_mutations(report, result.mutations)

        logger.info(
            "Report #%s: %s → %s by user #%s.",
            report.pk, previous, report.status, requesting_user.pk,
        )
        return report

    @staticmethod
    def get_available_transitions(report: Report, requesting_user: Any) -> list[str]:
        """Target statuses ``requesting_user`` may pick for ``report``."""
        return REPORT_ENGINE.available_actions(report, Actor.from_user(requesting_user))
