"""
Report lifecycle rules, expressed as a ``TransitionRules`` instance for
the generic engine in ``core.domain.workflow``.

    pending ──▶ in_progress ──▶ resolved
       │             │
       └──▶ rejected ◀┘

Officers and admins may transition.  Every accepted transition records
the actor as assignee and stamps ``updated_at``.
"""

from core.constants import REPORT_RESPONSE_MIN_LENGTH
from core.domain.access import EntityType
from core.domain.workflow import StatusTransitionEngine, TransitionRules

from .models import ReportStatus

_CLOSING_STATES = frozenset({ReportStatus.RESOLVED.value, ReportStatus.REJECTED.value})


def report_requires_response(from_state: str, to_state: str) -> bool:
    """
    A response is needed when a report leaves ``pending`` for any other
    state, and whenever it is closed.
    """
    if to_state == ReportStatus.PENDING:
        return False
    return from_state == ReportStatus.PENDING or to_state in _CLOSING_STATES


REPORT_RULES = TransitionRules(
    entity_type=EntityType.REPORT,
    states=tuple(ReportStatus.values),
    initial_state=ReportStatus.PENDING,
    allowed={
        ReportStatus.PENDING: (ReportStatus.IN_PROGRESS, ReportStatus.REJECTED),
        ReportStatus.IN_PROGRESS: (ReportStatus.RESOLVED, ReportStatus.REJECTED),
        ReportStatus.RESOLVED: (),
        ReportStatus.REJECTED: (),
    },
    requires_response=report_requires_response,
    response_min_length=REPORT_RESPONSE_MIN_LENGTH,
    assign_actor=True,
    stamp_updated_at=True,
)

REPORT_ENGINE = StatusTransitionEngine(REPORT_RULES)
