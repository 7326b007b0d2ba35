"""
Admin user management.

    GET   /api/accounts/users/                   (accounts:user-list)
    GET   /api/accounts/users/{id}/              (accounts:user-detail)
    PATCH /api/accounts/users/{id}/change-role/  (accounts:user-change-role)
"""

from __future__ import annotations

import logging

import pytest
from django.urls import reverse
from rest_framework import status


def _change_role_url(pk: int) -> str:
    return reverse("accounts:user-change-role", kwargs={"pk": pk})


@pytest.fixture()
def admin(create_user):
    return create_user(username="admin", role="admin")


@pytest.mark.django_db
class TestUserList:

    def test_admin_lists_and_filters(self, auth_client, admin, create_user):
        create_user(username="warga1")
        create_user(username="warga2")
        create_user(username="petugas1", role="officer", full_name="Rina Petugas")
        client = auth_client(admin)

        response = client.get(reverse("accounts:user-list"))
        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 4

        response = client.get(reverse("accounts:user-list"), {"role": "officer"})
        assert [row["username"] for row in response.data] == ["petugas1"]

        response = client.get(reverse("accounts:user-list"), {"search": "rina"})
        assert [row["username"] for row in response.data] == ["petugas1"]

    @pytest.mark.parametrize("role", ["citizen", "officer"])
    def test_non_admin_forbidden(self, auth_client, create_user, role):
        response = auth_client(create_user(role=role)).get(reverse("accounts:user-list"))
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_retrieve(self, auth_client, admin, create_user):
        target = create_user(username="warga1")
        response = auth_client(admin).get(
            reverse("accounts:user-detail", kwargs={"pk": target.pk}),
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.data["username"] == "warga1"

    def test_retrieve_missing(self, auth_client, admin):
        response = auth_client(admin).get(
            reverse("accounts:user-detail", kwargs={"pk": 987654}),
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestChangeRole:

    def test_admin_promotes_citizen(self, auth_client, admin, create_user, caplog):
        target = create_user()

        with caplog.at_level(logging.INFO, logger="accounts.services"):
            response = auth_client(admin).patch(
                _change_role_url(target.pk), {"role": "officer"}, format="json",
            )

        assert response.status_code == status.HTTP_200_OK, response.data
        assert response.data["role"] == "officer"
        target.refresh_from_db()
        assert target.role == "officer"
        assert "citizen → officer" in caplog.text

    def test_same_role_is_a_no_op(self, auth_client, admin, create_user, caplog):
        target = create_user(role="officer")

        with caplog.at_level(logging.INFO, logger="accounts.services"):
            response = auth_client(admin).patch(
                _change_role_url(target.pk), {"role": "officer"}, format="json",
            )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["role"] == "officer"
        assert "role changed" not in caplog.text

    def test_officer_cannot_change_roles(self, auth_client, create_user):
        target = create_user()
        response = auth_client(create_user(role="officer")).patch(
            _change_role_url(target.pk), {"role": "admin"}, format="json",
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        target.refresh_from_db()
        assert target.role == "citizen"

    def test_unknown_role(self, auth_client, admin, create_user):
        target = create_user()
        response = auth_client(admin).patch(
            _change_role_url(target.pk), {"role": "mayor"}, format="json",
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_unknown_user(self, auth_client, admin):
        response = auth_client(admin).patch(
            _change_role_url(424242), {"role": "officer"}, format="json",
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_admin_cannot_change_own_role(self, auth_client, admin):
        response = auth_client(admin).patch(
            _change_role_url(admin.pk), {"role": "citizen"}, format="json",
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data["code"] == "unauthorized"
        admin.refresh_from_db()
        assert admin.role == "admin"
