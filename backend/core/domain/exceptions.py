"""
core.domain.exceptions — Domain-specific exception hierarchy.

These exceptions represent business-rule violations inside service layers.
They are deliberately **not** DRF exceptions so that the domain layer stays
framework-agnostic.  The global DRF exception handler
(``core.domain.exception_handler``) maps them to HTTP responses.

Mapping cheatsheet
------------------
┌─────────────────────┬──────────────────────────────┬──────┐
│ Domain Exception    │ DRF / HTTP equivalent        │ Code │
├─────────────────────┼──────────────────────────────┼──────┤
│ DomainError         │ ValidationError / 400        │ 400  │
│ ResponseRequired    │ ValidationError / 400        │ 400  │
│ PermissionDenied    │ PermissionDenied / 403       │ 403  │
│ NotFound            │ NotFound / 404               │ 404  │
│ Conflict            │ APIException / 409           │ 409  │
│ InvalidTransition   │ APIException / 409           │ 409  │
│ TerminalState       │ APIException / 409           │ 409  │
└─────────────────────┴──────────────────────────────┴──────┘

Every exception carries a machine-readable ``code`` next to its
message.  The frontend localizes on ``code``; ``message`` is for logs
and developers.

``WorkflowIntegrityError`` is intentionally outside the hierarchy: it
signals a malformed snapshot (unknown status value, missing field) and
must surface as a server error, never as a 4xx.

Recommended usage inside a service::

    from core.domain.exceptions import InvalidTransition

    if new_status not in engine.allowed_targets(current_status):
        raise InvalidTransition(current=current_status, target=new_status)
"""

from __future__ import annotations


class DomainError(Exception):
    """
    Base class for all domain / business-rule errors.

    Catch this at the view boundary and convert to a 400 Bad Request.
    """

    default_code = "invalid"

    def __init__(
        self,
        message: str = "A business rule was violated.",
        *,
        code: str | None = None,
    ) -> None:
        self.message = message
        self.code = code or self.default_code
        super().__init__(self.message)


class PermissionDenied(DomainError):
    """
    The authenticated user's role does not allow this operation on this
    entity type.

    Maps to HTTP 403.
    """

    default_code = "unauthorized"

    def __init__(
        self,
        message: str = "You do not have permission to perform this action.",
        *,
        code: str | None = None,
    ) -> None:
        super().__init__(message, code=code)


class NotFound(DomainError):
    """
    The requested resource does not exist (or is not visible to the
    requesting user given their role scope).

    Maps to HTTP 404.
    """

    default_code = "not_found"

    def __init__(
        self,
        message: str = "The requested resource was not found.",
        *,
        code: str | None = None,
    ) -> None:
        super().__init__(message, code=code)


class Conflict(DomainError):
    """
    The operation conflicts with the current state of the resource.

    Typical usage: duplicate registration attempt.
    Maps to HTTP 409.
    """

    default_code = "conflict"

    def __init__(
        self,
        message: str = "The operation conflicts with the current state.",
        *,
        code: str | None = None,
    ) -> None:
        super().__init__(message, code=code)


class InvalidTransition(Conflict):
    """
    A state-machine transition that is not allowed from the current status.

    Inherits from ``Conflict`` because an invalid transition IS a conflict
    with the resource's current state.  Maps to HTTP 409.

    Requesting the status the entity already has is reported with
    ``code="no_change"``.

    Example::

        raise InvalidTransition(
            current="pending",
            target="resolved",
            reason="Report must be in progress before it can be resolved.",
        )
    """

    default_code = "invalid_transition"

    def __init__(
        self,
        message: str | None = None,
        *,
        current: str | None = None,
        target: str | None = None,
        reason: str | None = None,
        code: str | None = None,
    ) -> None:
        if message is None:
            parts = ["Invalid state transition"]
            if current and target:
                parts.append(f"from '{current}' to '{target}'")
            if reason:
                parts.append(f"({reason})")
            message = " ".join(parts) + "."
        super().__init__(message, code=code)
        self.current = current
        self.target = target
        self.reason = reason


class TerminalState(Conflict):
    """
    The entity is already in a final status; no transition is accepted.

    Maps to HTTP 409.
    """

    default_code = "terminal_state"

    def __init__(
        self,
        message: str | None = None,
        *,
        current: str | None = None,
        code: str | None = None,
    ) -> None:
        if message is None:
            message = (
                f"Status '{current}' is final and can no longer be changed."
                if current
                else "The current status is final and can no longer be changed."
            )
        super().__init__(message, code=code)
        self.current = current


class ResponseRequired(DomainError):
    """
    The transition needs an official response and none (or one that is
    too short) was supplied.

    Maps to HTTP 400.
    """

    default_code = "response_required"

    def __init__(
        self,
        message: str | None = None,
        *,
        min_length: int = 1,
        target: str | None = None,
        code: str | None = None,
    ) -> None:
        if message is None:
            if min_length > 1:
                message = (
                    f"A response of at least {min_length} characters is "
                    f"required for this status change."
                )
            else:
                message = "A response is required for this status change."
        super().__init__(message, code=code)
        self.min_length = min_length
        self.target = target


class WorkflowIntegrityError(Exception):
    """
    The workflow engine received data it cannot interpret: an entity
    without a status, a status outside the engine's state set, or an
    unknown target state.

    This is a data-integrity bug, not a user input problem.
    """
