"""
Smoke tests: Django boots, URL routing resolves, and the domain modules
are importable.
"""

from __future__ import annotations

import pytest
from django.urls import resolve, reverse


# ════════════════════════════════════════════════════════════════════
#  URL Routing
# ════════════════════════════════════════════════════════════════════

class TestURLRouting:

    EXPECTED_URLS = [
        # (url_name, kwargs, expected_path)
        ("accounts:register", {}, "/api/accounts/auth/register/"),
        ("accounts:login", {}, "/api/accounts/auth/login/"),
        ("accounts:token-refresh", {}, "/api/accounts/auth/token/refresh/"),
        ("accounts:me", {}, "/api/accounts/me/"),
        ("accounts:user-list", {}, "/api/accounts/users/"),
        ("accounts:user-change-role", {"pk": 7}, "/api/accounts/users/7/change-role/"),
        ("report-list", {}, "/api/reports/"),
        ("report-detail", {"pk": 3}, "/api/reports/3/"),
        ("report-transition", {"pk": 3}, "/api/reports/3/transition/"),
        ("suggestion-list", {}, "/api/suggestions/"),
        ("suggestion-transition", {"pk": 4}, "/api/suggestions/4/transition/"),
        ("core:system-constants", {}, "/api/core/constants/"),
        ("schema", {}, "/api/schema/"),
    ]

    @pytest.mark.parametrize("url_name,kwargs,expected", EXPECTED_URLS)
    def test_url_reverses(self, url_name, kwargs, expected):
        assert reverse(url_name, kwargs=kwargs) == expected

    @pytest.mark.parametrize("url_name,kwargs,expected", EXPECTED_URLS)
    def test_path_resolves(self, url_name, kwargs, expected):
        assert resolve(expected).func is not None


# ════════════════════════════════════════════════════════════════════
#  Domain Module Imports
# ════════════════════════════════════════════════════════════════════

class TestDomainImports:

    def test_engines(self):
        from reports.workflow import REPORT_ENGINE
        from suggestions.workflow import SUGGESTION_ENGINE

        assert REPORT_ENGINE.rules.entity_type == "report"
        assert SUGGESTION_ENGINE.rules.entity_type == "suggestion"

    def test_exception_handler_is_registered(self):
        from django.conf import settings

        assert settings.REST_FRAMEWORK["EXCEPTION_HANDLER"] == (
            "core.domain.exception_handler.domain_exception_handler"
        )
