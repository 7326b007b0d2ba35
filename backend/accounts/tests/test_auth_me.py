"""
Tests for ``GET`` / ``PATCH /api/accounts/me/``.
"""

from __future__ import annotations

import pytest
from django.urls import reverse
from rest_framework import status

ME_URL = reverse("accounts:me")


@pytest.mark.django_db
class TestMe:

    def test_requires_authentication(self, api_client):
        assert api_client.get(ME_URL).status_code == status.HTTP_401_UNAUTHORIZED

    def test_get_profile(self, auth_client, create_user):
        user = create_user(username="andi", role="officer")
        response = auth_client(user).get(ME_URL)

        assert response.status_code == status.HTTP_200_OK
        assert response.data["username"] == "andi"
        assert response.data["role"] == "officer"
        assert response.data["role_display"] == "Petugas"

    def test_update_profile(self, auth_client, create_user):
        user = create_user()
        response = auth_client(user).patch(
            ME_URL,
            {"full_name": "Andi Wijaya", "phone_number": "081377778888"},
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK, response.data
        user.refresh_from_db()
        assert user.full_name == "Andi Wijaya"
        assert user.phone_number == "081377778888"

    def test_cannot_change_own_role(self, auth_client, create_user):
        user = create_user()
        response = auth_client(user).patch(ME_URL, {"role": "admin"}, format="json")

        assert response.status_code == status.HTTP_200_OK
        user.refresh_from_db()
        assert user.role == "citizen"

    def test_email_taken_by_someone_else(self, auth_client, create_user):
        create_user(email="dipakai@example.com")
        user = create_user()
        response = auth_client(user).patch(
            ME_URL, {"email": "dipakai@example.com"}, format="json",
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert "email" in response.data["detail"]

    def test_keeping_own_email_is_fine(self, auth_client, create_user):
        user = create_user(email="saya@example.com")
        response = auth_client(user).patch(
            ME_URL, {"email": "saya@example.com"}, format="json",
        )
        assert response.status_code == status.HTTP_200_OK

    def test_case_variant_email_taken_by_someone_else(self, auth_client, create_user):
        create_user(email="dipakai@example.com")
        user = create_user()
        response = auth_client(user).patch(
            ME_URL, {"email": "Dipakai@Example.com"}, format="json",
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        user.refresh_from_db()
        assert user.email != "dipakai@example.com"

    def test_email_update_is_lowercased(self, auth_client, create_user):
        user = create_user()
        response = auth_client(user).patch(
            ME_URL, {"email": "Baru@Example.com"}, format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        user.refresh_from_db()
        assert user.email == "baru@example.com"
