"""
Integration tests for login and token refresh.

    POST /api/accounts/auth/login/          (accounts:login)
    POST /api/accounts/auth/token/refresh/  (accounts:token-refresh)
"""

from __future__ import annotations

import pytest
from django.urls import reverse
from rest_framework import status
from rest_framework_simplejwt.tokens import AccessToken

PASSWORD = "TestPass123!"


@pytest.fixture()
def officer(create_user):
    return create_user(
        username="siti",
        email="siti@example.com",
        phone_number="085611112222",
        role="officer",
    )


@pytest.mark.django_db
class TestLogin:

    @pytest.mark.parametrize(
        "identifier", ["siti", "siti@example.com", "085611112222"],
    )
    def test_login_with_any_identifier(self, api_client, officer, identifier):
        response = api_client.post(
            reverse("accounts:login"),
            {"identifier": identifier, "password": PASSWORD},
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK, response.data
        assert response.data["user"]["id"] == officer.pk
        assert response.data["user"]["role"] == "officer"
        assert AccessToken(response.data["access"])["role"] == "officer"

    def test_email_is_case_insensitive(self, api_client, officer):
        response = api_client.post(
            reverse("accounts:login"),
            {"identifier": "  SITI@Example.com ", "password": PASSWORD},
            format="json",
        )
        assert response.status_code == status.HTTP_200_OK

    def test_all_digit_username_falls_back_to_username(self, api_client, create_user):
        user = create_user(username="0899000111", phone_number="081355556666")
        response = api_client.post(
            reverse("accounts:login"),
            {"identifier": "0899000111", "password": PASSWORD},
            format="json",
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.data["user"]["id"] == user.pk

    def test_wrong_password(self, api_client, officer):
        response = api_client.post(
            reverse("accounts:login"),
            {"identifier": "siti", "password": "salah"},
            format="json",
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_unknown_identifier(self, api_client, officer):
        response = api_client.post(
            reverse("accounts:login"),
            {"identifier": "tidak-ada", "password": PASSWORD},
            format="json",
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_inactive_user(self, api_client, create_user):
        create_user(username="nonaktif", is_active=False)
        response = api_client.post(
            reverse("accounts:login"),
            {"identifier": "nonaktif", "password": PASSWORD},
            format="json",
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_refresh(self, api_client, officer):
        login = api_client.post(
            reverse("accounts:login"),
            {"identifier": "siti", "password": PASSWORD},
            format="json",
        )
        response = api_client.post(
            reverse("accounts:token-refresh"),
            {"refresh": login.data["refresh"]},
            format="json",
        )
        assert response.status_code == status.HTTP_200_OK
        assert "access" in response.data

    def test_token_authenticates_requests(self, api_client, officer):
        login = api_client.post(
            reverse("accounts:login"),
            {"identifier": "siti", "password": PASSWORD},
            format="json",
        )
        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {login.data['access']}")
        response = api_client.get(reverse("accounts:me"))
        assert response.status_code == status.HTTP_200_OK
        assert response.data["username"] == "siti"
