"""
Suggestion lifecycle rules for the generic engine.

    pending ──▶ approved
       └─────▶ rejected

Admin-only.  Any non-empty response satisfies the response rule; there
is no assignee and no timestamp side effect.
"""

from core.constants import SUGGESTION_RESPONSE_MIN_LENGTH
from core.domain.access import EntityType
from core.domain.workflow import StatusTransitionEngine, TransitionRules

from .models import SuggestionStatus

_DECISION_STATES = frozenset({SuggestionStatus.APPROVED.value, SuggestionStatus.REJECTED.value})


def suggestion_requires_response(from_state: str, to_state: str) -> bool:
    if to_state == SuggestionStatus.PENDING:
        return False
    return from_state == SuggestionStatus.PENDING or to_state in _DECISION_STATES


SUGGESTION_RULES = TransitionRules(
    entity_type=EntityType.SUGGESTION,
    states=tuple(SuggestionStatus.values),
    initial_state=SuggestionStatus.PENDING,
    allowed={
        SuggestionStatus.PENDING: (SuggestionStatus.APPROVED, SuggestionStatus.REJECTED),
        SuggestionStatus.APPROVED: (),
        SuggestionStatus.REJECTED: (),
    },
    requires_response=suggestion_requires_response,
    response_min_length=SUGGESTION_RESPONSE_MIN_LENGTH,
)

SUGGESTION_ENGINE = StatusTransitionEngine(SUGGESTION_RULES)
