"""
core.domain.workflow — Generic status-transition engine.

One engine, instantiated once per entity type with a data-driven rule
set (``TransitionRules``).  The engine is pure: it reads an entity
snapshot, the acting ``Actor`` and the requested target status, and
returns a ``TransitionResult`` that either carries the field mutations
to persist or a typed ``Rejection``.  It never touches the database.

Validation order
----------------
1. Authorization   → ``RejectionReason.UNAUTHORIZED``
2. Terminal status → ``RejectionReason.TERMINAL_STATE``
3. Table lookup    → ``RejectionReason.INVALID_TRANSITION`` / ``NO_CHANGE``
4. Response rule   → ``RejectionReason.RESPONSE_REQUIRED``

Expected rule violations are *returned*, not raised.  Callers that want
exceptions call ``TransitionResult.raise_for_rejection()``, which maps
each reason onto ``core.domain.exceptions``.  Only malformed input
(unknown status values, a snapshot without a status) raises, with
``WorkflowIntegrityError``.

Usage::

    from core.domain.workflow import Actor

    result = REPORT_ENGINE.request_transition(
        report, Actor.from_user(request.user), "in_progress",
        "Sedang ditangani tim teknis",
    )
    result.raise_for_rejection()
    apply_mutations(report, result.mutations)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any, Callable

from django.db import models
from django.utils import timezone

from core.domain.access import Action, is_allowed
from core.domain.exceptions import (
    DomainError,
    InvalidTransition,
    PermissionDenied,
    ResponseRequired,
    TerminalState,
    WorkflowIntegrityError,
)

logger = logging.getLogger(__name__)

# Mutation-map keys (model attribute names).
STATUS_FIELD = "status"
RESPONSE_FIELD = "response"
ASSIGNEE_FIELD = "assignee_id"
UPDATED_AT_FIELD = "updated_at"


class RejectionReason(models.TextChoices):
    UNAUTHORIZED = "unauthorized", "Unauthorized"
    TERMINAL_STATE = "terminal_state", "Terminal state"
    INVALID_TRANSITION = "invalid_transition", "Invalid transition"
    NO_CHANGE = "no_change", "No changes to save"
    RESPONSE_REQUIRED = "response_required", "Response required"


@dataclass(frozen=True)
class Actor:
    """The identity performing a transition: an id and a role value."""

    id: Any
    role: str

    @classmethod
    def from_user(cls, user: Any) -> Actor:
        return cls(id=user.pk, role=str(user.role))


@dataclass(frozen=True)
class Rejection:
    """A typed, localizable reason why a transition was refused."""

    reason: str
    message: str
    current: str | None = None
    target: str | None = None
    min_length: int = 0

    def to_exception(self) -> DomainError:
        """Translate into the matching ``core.domain.exceptions`` class."""
        if self.reason == RejectionReason.UNAUTHORIZED:
            return PermissionDenied(self.message)
        if self.reason == RejectionReason.TERMINAL_STATE:
            return TerminalState(self.message, current=self.current)
        if self.reason == RejectionReason.RESPONSE_REQUIRED:
            return ResponseRequired(
                self.message, min_length=self.min_length, target=self.target,
            )
        return InvalidTransition(
            self.message,
            current=self.current,
            target=self.target,
            code=str(self.reason),
        )


@dataclass(frozen=True)
class TransitionResult:
    """Outcome of ``StatusTransitionEngine.request_transition``."""

    mutations: Mapping[str, Any] = field(default_factory=dict)
    rejection: Rejection | None = None

    @property
    def accepted(self) -> bool:
        return self.rejection is None

    def raise_for_rejection(self) -> None:
        """Raise the domain exception for a rejected transition; no-op otherwise."""
        if self.rejection is not None:
            raise self.rejection.to_exception()


@dataclass(frozen=True)
class TransitionRules:
    """
    Data-driven definition of one entity type's lifecycle.

    Attributes:
        entity_type:         ``core.domain.access.EntityType`` value used
                             for the authorization lookup.
        states:              Every valid status value, in display order.
        initial_state:       Status of a freshly created entity.  A
                             transition *into* this state clears the
                             response (and the assignee, if tracked).
        allowed:             ``state → tuple of reachable states``.  A
                             state with no successors is terminal.
        requires_response:   ``(from_state, to_state) → bool``.
        response_min_length: Minimum length of the trimmed response when
                             one is required.
        assign_actor:        Record the acting user as assignee on every
                             accepted transition.
        stamp_updated_at:    Emit ``updated_at = now`` on every accepted
                             transition.
    """

    entity_type: str
    states: tuple[str, ...]
    initial_state: str
    allowed: Mapping[str, tuple[str, ...]]
    requires_response: Callable[[str, str], bool]
    response_min_length: int = 1
    assign_actor: bool = False
    stamp_updated_at: bool = False

    def __post_init__(self) -> None:
        states = tuple(str(s) for s in self.states)
        allowed = {
            str(source): tuple(str(t) for t in targets)
            for source, targets in self.allowed.items()
        }
        if str(self.initial_state) not in states:
            raise ValueError(
                f"Initial state '{self.initial_state}' is not one of {states}."
            )
        for source, targets in allowed.items():
            unknown = [s for s in (source, *targets) if s not in states]
            if unknown:
                raise ValueError(
                    f"Transition table for '{self.entity_type}' references "
                    f"unknown states: {unknown}."
                )
        # Normalise to plain strings so lookups work with raw values.
        object.__setattr__(self, "states", states)
        object.__setattr__(self, "initial_state", str(self.initial_state))
        object.__setattr__(
            self,
            "allowed",
            MappingProxyType({s: allowed.get(s, ()) for s in states}),
        )

    @property
    def terminal_states(self) -> frozenset[str]:
        return frozenset(s for s in self.states if not self.allowed[s])


class StatusTransitionEngine:
    """
    Validates requested status changes and computes the resulting field
    mutations for one entity type.
    """

    def __init__(
        self,
        rules: TransitionRules,
        *,
        clock: Callable[[], datetime] = timezone.now,
    ) -> None:
        self.rules = rules
        self._clock = clock

    def __repr__(self) -> str:
        return f"<StatusTransitionEngine {self.rules.entity_type}>"

    # ── Table queries ────────────────────────────────────────────────

    def is_terminal(self, status: str) -> bool:
        return self._validated_state(status, "status") in self.rules.terminal_states

    def allowed_targets(self, status: str) -> list[str]:
        """States reachable from ``status`` in one accepted transition."""
        return list(self.rules.allowed[self._validated_state(status, "status")])

    def can_transition(self, actor: Actor) -> bool:
        return is_allowed(actor.role, self.rules.entity_type, Action.TRANSITION)

    def available_actions(self, entity: Any, actor: Actor) -> list[str]:
        """
        Targets the UI may offer ``actor`` for ``entity``: empty when the
        actor lacks transition rights or the entity is terminal.
        """
        if not self.can_transition(actor):
            return []
        return self.allowed_targets(self._current_status(entity))

    # ── Transition ───────────────────────────────────────────────────

    def request_transition(
        self,
        entity: Any,
        actor: Actor,
        to_state: str,
        response_text: str | None = None,
        *,
        now: datetime | None = None,
    ) -> TransitionResult:
        """
        Validate moving ``entity`` to ``to_state`` on behalf of ``actor``.

        Args:
            entity:        Snapshot of the persisted row: a model instance
                           or a mapping with a ``status`` key.
            actor:         The acting identity.
            to_state:      Requested status value.
            response_text: Optional official response.
            now:           Timestamp for ``updated_at``; defaults to the
                           engine clock.

        Returns:
            A ``TransitionResult``; ``accepted`` is ``False`` when a rule
            was violated.

        Raises:
            WorkflowIntegrityError: ``entity`` has no status, or either
                status is not a member of the rule set.
        """
        current = self._current_status(entity)
        target = self._validated_state(to_state, "target status")
        entity_type = self.rules.entity_type

        if not self.can_transition(actor):
            return self._reject(
                RejectionReason.UNAUTHORIZED,
                f"Role '{actor.role}' may not change the status of "
                f"{entity_type} records.",
                current=current,
                target=target,
            )

        if current in self.rules.terminal_states:
            return self._reject(
                RejectionReason.TERMINAL_STATE,
                f"Status '{current}' is final and can no longer be changed.",
                current=current,
                target=target,
            )

        if target == current:
            return self._reject(
                RejectionReason.NO_CHANGE,
                "No changes to save.",
                current=current,
                target=target,
            )

        if target not in self.rules.allowed[current]:
            return self._reject(
                RejectionReason.INVALID_TRANSITION,
                f"Cannot change status from '{current}' to '{target}'.",
                current=current,
                target=target,
            )

        text = (response_text or "").strip()
        min_length = self.rules.response_min_length
        if self.rules.requires_response(current, target) and len(text) < max(min_length, 1):
            if min_length > 1:
                message = (
                    f"A response of at least {min_length} characters is "
                    f"required to move from '{current}' to '{target}'."
                )
            else:
                message = (
                    f"A response is required to move from '{current}' "
                    f"to '{target}'."
                )
            return self._reject(
                RejectionReason.RESPONSE_REQUIRED,
                message,
                current=current,
                target=target,
                min_length=max(min_length, 1),
            )

        return TransitionResult(
            mutations=MappingProxyType(
                self.compute_mutations(actor, target, text, now=now)
            ),
        )

    def compute_mutations(
        self,
        actor: Actor,
        to_state: str,
        response_text: str | None = None,
        *,
        now: datetime | None = None,
    ) -> dict[str, Any]:
        """
        Field updates for an accepted transition into ``to_state``.

        Primary mutation first (status, trimmed response, assignee), then
        the return-to-initial rule, then the timestamp.  No validation is
        performed here; ``request_transition`` is the public entry point.
        """
        target = self._validated_state(to_state, "target status")
        text = (response_text or "").strip()

        mutations: dict[str, Any] = {STATUS_FIELD: target}
        if text:
            mutations[RESPONSE_FIELD] = text
        if self.rules.assign_actor:
            mutations[ASSIGNEE_FIELD] = actor.id

        if target == self.rules.initial_state:
            self._reset_to_initial(mutations)

        if self.rules.stamp_updated_at:
            mutations[UPDATED_AT_FIELD] = now if now is not None else self._clock()
        return mutations

    # ── Internals ────────────────────────────────────────────────────

    def _reset_to_initial(self, mutations: dict[str, Any]) -> None:
        # Back to the initial state means "not yet triaged".
        mutations[RESPONSE_FIELD] = None
        if self.rules.assign_actor:
            mutations[ASSIGNEE_FIELD] = None

    def _current_status(self, entity: Any) -> str:
        if isinstance(entity, Mapping):
            status = entity.get(STATUS_FIELD)
        else:
            status = getattr(entity, STATUS_FIELD, None)
        if status is None:
            raise WorkflowIntegrityError(
                f"{self.rules.entity_type} snapshot has no status: {entity!r}"
            )
        return self._validated_state(status, "status")

    def _validated_state(self, value: Any, what: str) -> str:
        state = str(value)
        if state not in self.rules.allowed:
            raise WorkflowIntegrityError(
                f"Unknown {self.rules.entity_type} {what} '{value}'; "
                f"expected one of {list(self.rules.states)}."
            )
        return state

    def _reject(self, reason: str, message: str, **kwargs: Any) -> TransitionResult:
        logger.debug(
            "%s transition rejected [%s]: %s",
            self.rules.entity_type, reason, message,
        )
        return TransitionResult(
            rejection=Rejection(reason=str(reason), message=message, **kwargs),
        )
