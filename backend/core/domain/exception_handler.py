"""
core.domain.exception_handler — Global DRF exception handler.

Turns ``core.domain.exceptions`` raised by the service layer into JSON
error responses, so views never wrap service calls in try/except.

Response body::

    {
        "detail": "A response of at least 10 characters is required ...",
        "code": "response_required",
        "target": "resolved",        # transition errors only
        "min_length": 10             # ResponseRequired only
    }

``code`` is the stable, machine-readable reason the frontend translates.
``current`` / ``target`` / ``min_length`` are included when the exception
carries them.

Registered in ``settings.py``::

    REST_FRAMEWORK = {
        ...
        "EXCEPTION_HANDLER": "core.domain.exception_handler.domain_exception_handler",
    }
"""

from __future__ import annotations

import logging
from typing import Any

from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_default_handler

from core.domain.exceptions import (
    Conflict,
    DomainError,
    NotFound,
    PermissionDenied,
    ResponseRequired,
)

logger = logging.getLogger(__name__)

# Resolved along the exception's MRO, so subclasses inherit a status:
# InvalidTransition and TerminalState → Conflict → 409.
_HTTP_STATUS: dict[type, int] = {
    PermissionDenied: 403,
    NotFound: 404,
    Conflict: 409,
    ResponseRequired: 400,
    DomainError: 400,
}

_DETAIL_ATTRS = ("current", "target", "min_length")


def _status_for(exc: DomainError) -> int:
    for klass in type(exc).__mro__:
        if klass in _HTTP_STATUS:
            return _HTTP_STATUS[klass]
    return 400


def _error_body(exc: DomainError) -> dict[str, Any]:
    body: dict[str, Any] = {"detail": exc.message, "code": exc.code}
    for attr in _DETAIL_ATTRS:
        value = getattr(exc, attr, None)
        if value is not None:
            body[attr] = value
    return body


def _actor_label(context: dict) -> str:
    request = context.get("request")
    user = getattr(request, "user", None)
    if user is None or not getattr(user, "is_authenticated", False):
        return "anonymous"
    return f"user #{user.pk} ({getattr(user, 'role', '?')})"


def domain_exception_handler(exc: Exception, context: dict) -> Response | None:
    """
    DRF's default handler runs first (validation, authentication,
    throttling ...).  Domain errors it does not know are mapped here;
    anything else, ``WorkflowIntegrityError`` included, returns ``None``
    and propagates as a server error.
    """
    response = drf_default_handler(exc, context)
    if response is not None or not isinstance(exc, DomainError):
        return response

    status_code = _status_for(exc)
    logger.warning(
        "%s/%s for %s in %s: %s",
        type(exc).__name__,
        exc.code,
        _actor_label(context),
        context.get("view", "unknown"),
        exc.message,
    )
    return Response(_error_body(exc), status=status_code)
