"""
Accounts app serializers.

Contains all Request and Response serializers for the accounts API.
Serializers handle field definitions, read/write constraints, and
basic validation.  **No business logic** lives here: uniqueness
conflicts and role rules are enforced in ``services.py``.
"""

from __future__ import annotations

from typing import Any

from django.contrib.auth import get_user_model
from django.contrib.auth.validators import UnicodeUsernameValidator
from rest_framework import serializers
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer

from core.constants import PASSWORD_MIN_LENGTH
from core.domain.access import Role

from .models import phone_number_validator
from .services import AuthenticationService

User = get_user_model()

# Uniqueness is checked by the service layer so duplicates surface as 409.
_NO_UNIQUE_CHECK = {
    "username": {"validators": [UnicodeUsernameValidator()]},
    "email": {"validators": []},
    "phone_number": {"validators": [phone_number_validator]},
}


# ═══════════════════════════════════════════════════════════════════
#  Authentication Serializers
# ═══════════════════════════════════════════════════════════════════


class RegisterRequestSerializer(serializers.ModelSerializer):
    """
    Validates new-user registration data.

    Required fields: username, password, password_confirm, email,
    phone_number (10–14 digits), full_name.

    The ``password`` field is write-only and will be hashed by the
    service layer before persisting.  The response after a successful
    registration is handled by ``UserDetailSerializer``.
    """

    password = serializers.CharField(
        write_only=True,
        min_length=PASSWORD_MIN_LENGTH,
        style={"input_type": "password"},
        help_text=f"Minimum {PASSWORD_MIN_LENGTH} characters.",
    )
    password_confirm = serializers.CharField(
        write_only=True,
        style={"input_type": "password"},
        help_text="Must match 'password'.",
    )

    class Meta:
        model = User
        fields = [
            "username",
            "password",
            "password_confirm",
            "email",
            "phone_number",
            "full_name",
        ]
        extra_kwargs = {
            **_NO_UNIQUE_CHECK,
            "email": {"required": True, "validators": []},
            "full_name": {"required": True},
        }

    def validate_email(self, value: str) -> str:
        return value.strip().lower()

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:
        if attrs["password"] != attrs["password_confirm"]:
            raise serializers.ValidationError(
                {"password_confirm": "Passwords do not match."}
            )

        # Remove password_confirm — not needed beyond validation
        attrs.pop("password_confirm")
        return attrs


class CustomTokenObtainPairSerializer(TokenObtainPairSerializer):
    """
    Custom SimpleJWT serializer that:

    1. Accepts ``identifier`` + ``password`` instead of
       ``username`` + ``password``.
    2. Resolves the user through ``AuthenticationService`` (and thereby
       the ``MultiFieldAuthBackend``).
    3. Issues tokens carrying a ``role`` claim.
    4. Exposes the authenticated user as ``self.user`` so the view can
       nest it in the response.
    """

    username_field = "identifier"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields.pop(self.username_field, None)
        self.fields["identifier"] = serializers.CharField(
            help_text="Username, email or phone number.",
        )

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:
        user = AuthenticationService.authenticate(
            attrs.get("identifier"),
            attrs.get("password"),
            request=self.context.get("request"),
        )

        # ModelBackend.user_can_authenticate already rejects inactive users
        if user is None:
            raise serializers.ValidationError(
                {"detail": "Invalid credentials."},
                code="authentication",
            )

        self.user = user
        return AuthenticationService.generate_tokens(user)


class TokenResponseSerializer(serializers.Serializer):
    """
    Serializes the JWT token pair returned after successful login.
    """

    access = serializers.CharField(read_only=True)
    refresh = serializers.CharField(read_only=True)
    user = serializers.SerializerMethodField()

    def get_user(self, obj: dict) -> dict | None:
        user = obj.get("user")
        if user:
            return UserDetailSerializer(user).data
        return None


# ═══════════════════════════════════════════════════════════════════
#  User Serializers
# ═══════════════════════════════════════════════════════════════════


class UserListSerializer(serializers.ModelSerializer):
    """Serializer for listing users (admin views)."""

    role_display = serializers.CharField(source="get_role_display", read_only=True)

    class Meta:
        model = User
        fields = [
            "id",
            "username",
            "full_name",
            "email",
            "phone_number",
            "is_active",
            "role",
            "role_display",
        ]
        read_only_fields = fields


class UserDetailSerializer(serializers.ModelSerializer):
    """
    Full user representation (used in retrieve, me, and registration
    response).
    """

    role_display = serializers.CharField(source="get_role_display", read_only=True)

    class Meta:
        model = User
        fields = [
            "id",
            "username",
            "full_name",
            "email",
            "phone_number",
            "is_active",
            "date_joined",
            "role",
            "role_display",
        ]
        read_only_fields = [
            "id",
            "username",
            "date_joined",
            "is_active",
            "role",
            "role_display",
        ]


class ChangeRoleSerializer(serializers.Serializer):
    """
    Request body for ``PATCH /api/accounts/users/{id}/change-role/``.
    """

    role = serializers.ChoiceField(
        choices=Role.choices,
        help_text="New role: citizen, officer or admin.",
    )


class UserFilterSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=Role.choices, required=False)
    search = serializers.CharField(required=False, allow_blank=True, max_length=255)


class MeUpdateSerializer(serializers.ModelSerializer):
    """
    Allows the authenticated user to update limited profile fields.
    Sensitive fields (role, is_active, username) are read-only and
    cannot be self-modified.
    """

    class Meta:
        model = User
        fields = [
            "full_name",
            "email",
            "phone_number",
        ]
        extra_kwargs = {
            "email": {"validators": []},
            "phone_number": {"validators": [phone_number_validator]},
        }

    def validate_email(self, value: str) -> str:
        return value.strip().lower()
