"""
Tests for the role/capability table in ``core.domain.access``.
"""

from __future__ import annotations

import pytest

from core.domain.access import (
    CAPABILITIES,
    Action,
    EntityType,
    get_user_role_name,
    is_allowed,
    require_capability,
)
from core.domain.exceptions import PermissionDenied


class TestCapabilityTable:

    @pytest.mark.parametrize(
        "role,entity_type,action,expected",
        [
            ("citizen", "report", "create", True),
            ("citizen", "report", "transition", False),
            ("citizen", "report", "read_all", False),
            ("citizen", "suggestion", "create", True),
            ("officer", "report", "create", False),
            ("officer", "report", "transition", True),
            ("officer", "suggestion", "transition", False),
            ("officer", "suggestion", "read_all", True),
            ("admin", "report", "transition", True),
            ("admin", "suggestion", "transition", True),
            ("admin", "suggestion", "create", False),
            ("admin", "user", "change_role", True),
            ("officer", "user", "change_role", False),
        ],
    )
    def test_lookup(self, role, entity_type, action, expected):
        assert is_allowed(role, entity_type, action) is expected

    def test_enum_members_and_values_agree(self):
        assert is_allowed("officer", EntityType.REPORT, Action.TRANSITION)
        assert ("officer", "report", "transition") in CAPABILITIES

    def test_none_role(self):
        assert not is_allowed(None, "report", "read_own")

    def test_unknown_role(self):
        assert not is_allowed("mayor", "report", "read_all")


@pytest.mark.django_db
class TestUserHelpers:

    def test_role_name(self, create_user):
        assert get_user_role_name(create_user(role="officer")) == "officer"

    def test_anonymous_has_no_role(self):
        from django.contrib.auth.models import AnonymousUser

        assert get_user_role_name(AnonymousUser()) is None

    def test_require_capability_raises(self, create_user):
        with pytest.raises(PermissionDenied) as exc_info:
            require_capability(create_user(role="officer"), EntityType.REPORT, Action.CREATE)
        assert exc_info.value.code == "unauthorized"

    def test_require_capability_custom_message(self, create_user):
        with pytest.raises(PermissionDenied, match="Only citizens"):
            require_capability(
                create_user(role="admin"), EntityType.SUGGESTION, Action.CREATE,
                message="Only citizens can submit suggestions.",
            )

