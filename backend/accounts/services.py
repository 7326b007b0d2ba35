"""
Accounts Service Layer.

This module is the **single source of truth** for all business logic
within the ``accounts`` app.  Views must remain *thin*: they validate
input through serializers, call a service method, and return the result
wrapped in a DRF ``Response``.

Architecture
------------
- ``UserRegistrationService``  — public citizen sign-up.
- ``AuthenticationService``    — multi-field login + JWT issuance.
- ``UserManagementService``    — admin-only listing and role changes.
- ``CurrentUserService``       — "Me" endpoint helpers.
"""

from __future__ import annotations

import logging
from typing import Any

from django.contrib.auth import authenticate as django_authenticate
from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.db.models import Q, QuerySet
from rest_framework_simplejwt.tokens import RefreshToken

from core.domain.access import Action, EntityType, Role, require_capability
from core.domain.exceptions import Conflict, NotFound, PermissionDenied

User = get_user_model()

logger = logging.getLogger(__name__)

# Unique field → lookup.  Email is matched case-insensitively, like login.
_UNIQUE_LOOKUPS = {
    "username": "username",
    "email": "email__iexact",
    "phone_number": "phone_number",
}


def _find_conflicts(data: dict[str, Any], *, exclude_pk: int | None = None) -> list[str]:
    """Names of unique fields in ``data`` already held by another user."""
    conflicts = []
    for field, lookup in _UNIQUE_LOOKUPS.items():
        if field not in data:
            continue
        qs = User.objects.filter(**{lookup: data[field]})
        if exclude_pk is not None:
            qs = qs.exclude(pk=exclude_pk)
        if qs.exists():
            conflicts.append(field)
    return conflicts


# ═══════════════════════════════════════════════════════════════════
#  Registration Service
# ═══════════════════════════════════════════════════════════════════


class UserRegistrationService:
    """
    Public sign-up.  Everyone who registers is a citizen; officers and
    admins are promoted afterwards by an admin.
    """

    @staticmethod
    def register_user(validated_data: dict[str, Any]) -> User:
        """
        Create a new citizen account.

        Parameters
        ----------
        validated_data : dict
            Cleaned data from ``RegisterRequestSerializer``: ``username``,
            ``password``, ``email``, ``phone_number``, ``full_name``.
            ``password_confirm`` has already been consumed during
            serializer validation.

        Returns
        -------
        User
            The newly created (and saved) ``User`` instance.

        Raises
        ------
        core.domain.exceptions.Conflict
            If username, email or phone_number is already taken.
        """
        validated_data.pop("password_confirm", None)
        password = validated_data.pop("password")
        validated_data.pop("role", None)

        # Pre-check uniqueness for deterministic, field-specific errors
        conflicts = _find_conflicts(validated_data)
        if conflicts:
            raise Conflict(
                f"The following field(s) already exist: {', '.join(conflicts)}."
            )

        try:
            with transaction.atomic():
                user = User.objects.create_user(
                    password=password,
                    role=Role.CITIZEN,
                    **validated_data,
                )
        except IntegrityError:
            raise Conflict(
                "A user with one of the provided unique fields already exists."
            )

        logger.info("Registered citizen #%s (%s).", user.pk, user.username)
        return user


# ═══════════════════════════════════════════════════════════════════
#  Authentication Service
# ═══════════════════════════════════════════════════════════════════


class AuthenticationService:
    """
    Handles multi-field login and JWT token generation.
    Supports identification via any one of: username, email or
    phone_number.
    """

    @staticmethod
    def authenticate(identifier: str, password: str, request: Any = None) -> User | None:
        """
        Validate credentials and return the user if successful.

        Returns ``None`` when the credentials are wrong or the account is
        inactive; ``accounts.backends.MultiFieldAuthBackend`` does the
        actual lookup.
        """
        return django_authenticate(request, identifier=identifier, password=password)

    @staticmethod
    def generate_tokens(user: User) -> dict[str, str]:
        """
        Issue a JWT access/refresh token pair for the given user.

        The access token carries a ``role`` claim so clients can pick the
        right home screen without an extra request.
        """
        refresh = RefreshToken.for_user(user)
        refresh["role"] = user.role
        return {
            "access": str(refresh.access_token),
            "refresh": str(refresh),
        }


# ═══════════════════════════════════════════════════════════════════
#  User Management Service
# ═══════════════════════════════════════════════════════════════════


class UserManagementService:
    """
    Administrative operations on users.  Every method re-checks the
    caller's capability; views only ensure authentication.
    """

    @staticmethod
    def list_users(
        *,
        performed_by: User,
        role: str | None = None,
        search: str | None = None,
    ) -> QuerySet[User]:
        """
        Return a filtered queryset of users.

        Parameters
        ----------
        performed_by : User
            Must be an admin.
        role : str, optional
            Filter by ``Role`` value.
        search : str, optional
            Case-insensitive search across ``username``, ``email``,
            ``phone_number`` and ``full_name``.

        Raises
        ------
        PermissionDenied
            The caller is not an admin.
        """
        require_capability(
            performed_by, EntityType.USER, Action.READ_ALL,
            message="Only admins can list users.",
        )
        qs = User.objects.all()

        if role:
            qs = qs.filter(role=role)
        if search:
            qs = qs.filter(
                Q(username__icontains=search)
                | Q(email__icontains=search)
                | Q(phone_number__icontains=search)
                | Q(full_name__icontains=search)
            )

        return qs

    @staticmethod
    def get_user(user_id: int, *, performed_by: User) -> User:
        require_capability(
            performed_by, EntityType.USER, Action.READ_ALL,
            message="Only admins can view other users.",
        )
        try:
            return User.objects.get(pk=user_id)
        except User.DoesNotExist:
            raise NotFound(f"User with id {user_id} not found.")

    @staticmethod
    @transaction.atomic
    def change_role(
        *,
        user_id: int,
        role: str,
        performed_by: User,
    ) -> User:
        """
        Change a user's role.

        Parameters
        ----------
        user_id : int
            PK of the target user.
        role : str
            The new ``Role`` value.
        performed_by : User
            The requesting user; must be an admin.

        Returns
        -------
        User
            The updated user, or the unchanged user when ``role`` equals
            the current role.

        Raises
        ------
        PermissionDenied
            If the requester is not an admin, or targets their own account.
        NotFound
            If the target user does not exist.
        """
        require_capability(
            performed_by, EntityType.USER, Action.CHANGE_ROLE,
            message="Only admins can change user roles.",
        )
        if user_id == performed_by.pk:
            raise PermissionDenied("Admins cannot change their own role.")
        try:
            target_user = User.objects.select_for_update().get(pk=user_id)
        except User.DoesNotExist:
            raise NotFound(f"User with id {user_id} not found.")

        if target_user.role == role:
            return target_user

        previous = target_user.role
        target_user.role = role
        target_user.save(update_fields=["role"])

        logger.info(
            "User #%s role changed %s → %s by admin #%s.",
            target_user.pk, previous, role, performed_by.pk,
        )
        return target_user


# ═══════════════════════════════════════════════════════════════════
#  Current User Service
# ═══════════════════════════════════════════════════════════════════


class CurrentUserService:
    """
    Helpers for the "Me" endpoint, the way clients discover who is
    logged in and which role they hold.
    """

    @staticmethod
    def get_profile(user: User) -> User:
        return User.objects.get(pk=user.pk)

    @staticmethod
    def update_profile(user: User, validated_data: dict[str, Any]) -> User:
        """
        Update the authenticated user's own profile fields.

        Parameters
        ----------
        user : User
            The currently authenticated user.
        validated_data : dict
            Cleaned fields from ``MeUpdateSerializer`` (``full_name``,
            ``email``, ``phone_number``).

        Notes
        -----
        The user may NOT change their own ``role``, ``is_active`` or
        ``username`` via this endpoint.

        Raises
        ------
        Conflict
            The new email or phone number belongs to another user.
        """
        conflicts = _find_conflicts(validated_data, exclude_pk=user.pk)
        if conflicts:
            raise Conflict(
                f"The following field(s) already exist: {', '.join(conflicts)}."
            )

        for field, value in validated_data.items():
            setattr(user, field, value)
        if validated_data:
            user.save(update_fields=list(validated_data.keys()))

        return User.objects.get(pk=user.pk)
