"""
core.domain.access — Role model and role-scoped queryset selectors.

The system knows exactly three roles and a closed set of capabilities.
Every authorization question is a lookup in ``CAPABILITIES``, keyed by
``(role, entity_type, action)``; there is no permission graph and no
per-object grant.

╔══════════════════════════════════════════════════════════════════╗
║  role      │ report                │ suggestion           │ user ║
║ ───────────┼───────────────────────┼──────────────────────┼───── ║
║  citizen   │ create, read_own      │ create, read_own     │  —   ║
║  officer   │ transition, read_all  │ read_all             │  —   ║
║  admin     │ transition, read_all  │ transition, read_all │ all  ║
╚══════════════════════════════════════════════════════════════════╝

Usage in an app's service layer::

    from core.domain.access import Action, EntityType, apply_role_scope

    class ReportQueryService:
        def get_scoped_queryset(self, user):
            return apply_role_scope(
                Report.objects.all(), user,
                entity_type=EntityType.REPORT,
                owner_field="reporter",
            )
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.db import models
from django.db.models import QuerySet

if TYPE_CHECKING:
    from accounts.models import User


class Role(models.TextChoices):
    """The three actor roles.  Labels follow the original UI wording."""

    CITIZEN = "citizen", "Masyarakat"
    OFFICER = "officer", "Petugas"
    ADMIN = "admin", "Admin"


class EntityType(models.TextChoices):
    REPORT = "report", "Pengaduan"
    SUGGESTION = "suggestion", "Aspirasi"
    USER = "user", "Pengguna"


class Action(models.TextChoices):
    CREATE = "create", "Create"
    TRANSITION = "transition", "Change status"
    READ_OWN = "read_own", "Read own records"
    READ_ALL = "read_all", "Read all records"
    CHANGE_ROLE = "change_role", "Change another user's role"


_GRANTS = (
    # ── Citizen ──────────────────────────────────────────────────────
    (Role.CITIZEN, EntityType.REPORT, Action.CREATE),
    (Role.CITIZEN, EntityType.REPORT, Action.READ_OWN),
    (Role.CITIZEN, EntityType.SUGGESTION, Action.CREATE),
    (Role.CITIZEN, EntityType.SUGGESTION, Action.READ_OWN),

    # ── Officer ──────────────────────────────────────────────────────
    (Role.OFFICER, EntityType.REPORT, Action.TRANSITION),
    (Role.OFFICER, EntityType.REPORT, Action.READ_ALL),
    (Role.OFFICER, EntityType.SUGGESTION, Action.READ_ALL),

    # ── Admin ────────────────────────────────────────────────────────
    (Role.ADMIN, EntityType.REPORT, Action.TRANSITION),
    (Role.ADMIN, EntityType.REPORT, Action.READ_ALL),
    (Role.ADMIN, EntityType.SUGGESTION, Action.TRANSITION),
    (Role.ADMIN, EntityType.SUGGESTION, Action.READ_ALL),
    (Role.ADMIN, EntityType.USER, Action.READ_ALL),
    (Role.ADMIN, EntityType.USER, Action.CHANGE_ROLE),
)

#: The complete authorization table.  Anything not listed is denied.
#: Stored as plain values: enum members hash by name, not by value.
CAPABILITIES: frozenset[tuple[str, str, str]] = frozenset(
    (role.value, entity_type.value, action.value)
    for role, entity_type, action in _GRANTS
)


def is_allowed(role: str | None, entity_type: str, action: str) -> bool:
    """Return ``True`` when ``CAPABILITIES`` grants ``action`` to ``role``."""
    if role is None:
        return False
    return (str(role), str(entity_type), str(action)) in CAPABILITIES


def get_user_role_name(user: User) -> str | None:
    """
    Return the role value for a user, or ``None`` for anonymous users.

    Informational helper for JWT claims, API responses and logging.
    """
    if not getattr(user, "is_authenticated", False):
        return None
    return getattr(user, "role", None)


def require_capability(
    user: User,
    entity_type: str,
    action: str,
    *,
    message: str = "",
) -> None:
    """
    Guard that raises ``PermissionDenied`` unless the user's role has
    ``action`` on ``entity_type``.

    Raises:
        core.domain.exceptions.PermissionDenied

    Example::

        require_capability(user, EntityType.REPORT, Action.CREATE)
    """
    from core.domain.exceptions import PermissionDenied as DomainPermissionDenied

    role = get_user_role_name(user)
    if not is_allowed(role, entity_type, action):
        raise DomainPermissionDenied(
            message
            or f"Role '{role}' may not {action} {entity_type} records."
        )


def apply_role_scope(
    queryset: QuerySet,
    user: User,
    *,
    entity_type: str,
    owner_field: str,
) -> QuerySet:
    """
    Restrict ``queryset`` to the rows ``user`` may read.

    ``read_all`` wins over ``read_own``; with neither the result is empty.

    Args:
        queryset:    Base (unfiltered) queryset.
        user:        The authenticated user.
        entity_type: One of ``EntityType``.
        owner_field: Name of the FK that points at the owning citizen.
    """
    role = get_user_role_name(user)
    if is_allowed(role, entity_type, Action.READ_ALL):
        return queryset
    if is_allowed(role, entity_type, Action.READ_OWN):
        return queryset.filter(**{owner_field: user})
    return queryset.none()
