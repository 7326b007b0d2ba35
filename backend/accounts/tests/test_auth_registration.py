"""
Integration tests for public registration.

Endpoint under test:  POST /api/accounts/auth/register/
                      (named URL: accounts:register)
Expected status:      201 Created, 400 on invalid input, 409 on duplicates.
Response serializer:  UserDetailSerializer
"""

from __future__ import annotations

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

User = get_user_model()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _registration_payload(**overrides) -> dict:
    """A valid payload; override any field with keyword arguments."""
    base = {
        "username": "budi",
        "password": "rahasia1",
        "password_confirm": "rahasia1",
        "email": "budi@example.com",
        "phone_number": "081234567890",
        "full_name": "Budi Santoso",
    }
    base.update(overrides)
    return base


# ---------------------------------------------------------------------------
# Test class
# ---------------------------------------------------------------------------

class TestAuthRegistrationFlow(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.register_url = reverse("accounts:register")

    def test_register_creates_citizen(self):
        response = self.client.post(self.register_url, _registration_payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["username"], "budi")
        self.assertEqual(response.data["role"], "citizen")
        self.assertEqual(response.data["role_display"], "Masyarakat")
        self.assertNotIn("password", response.data)

        user = User.objects.get(username="budi")
        self.assertTrue(user.check_password("rahasia1"))
        self.assertEqual(user.full_name, "Budi Santoso")

    def test_role_in_payload_is_ignored(self):
        response = self.client.post(
            self.register_url, _registration_payload(role="admin"), format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(User.objects.get(username="budi").role, "citizen")

    def test_password_mismatch(self):
        response = self.client.post(
            self.register_url,
            _registration_payload(password_confirm="rahasia2"),
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("password_confirm", response.data)
        self.assertFalse(User.objects.filter(username="budi").exists())

    def test_password_too_short(self):
        response = self.client.post(
            self.register_url,
            _registration_payload(password="abc", password_confirm="abc"),
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("password", response.data)

    def test_phone_number_format(self):
        for phone in ("08123", "0812-3456-7890", "081234567890123"):
            with self.subTest(phone=phone):
                response = self.client.post(
                    self.register_url,
                    _registration_payload(phone_number=phone),
                    format="json",
                )
                self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
                self.assertIn("phone_number", response.data)

    def test_missing_full_name(self):
        payload = _registration_payload()
        payload.pop("full_name")
        response = self.client.post(self.register_url, payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("full_name", response.data)

    def test_duplicate_fields_conflict(self):
        self.client.post(self.register_url, _registration_payload(), format="json")

        duplicates = {
            "username": _registration_payload(
                email="lain@example.com", phone_number="081299999999",
            ),
            "email": _registration_payload(
                username="budi2", phone_number="081299999999",
            ),
            "phone_number": _registration_payload(
                username="budi2", email="lain@example.com",
            ),
        }
        for field, payload in duplicates.items():
            with self.subTest(field=field):
                response = self.client.post(self.register_url, payload, format="json")
                self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
                self.assertEqual(response.data["code"], "conflict")
                self.assertIn(field, response.data["detail"])

        self.assertEqual(User.objects.count(), 1)

    def test_email_is_stored_lowercase(self):
        response = self.client.post(
            self.register_url,
            _registration_payload(email="Budi.Santoso@Example.COM"),
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["email"], "budi.santoso@example.com")

    def test_case_variant_email_conflicts(self):
        first = self.client.post(
            self.register_url,
            _registration_payload(email="Budi@example.com"),
            format="json",
        )
        self.assertEqual(first.status_code, status.HTTP_201_CREATED)

        response = self.client.post(
            self.register_url,
            _registration_payload(
                username="budi2",
                email="budi@example.com",
                phone_number="081299999999",
            ),
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertIn("email", response.data["detail"])
        self.assertEqual(User.objects.count(), 1)

        login = self.client.post(
            reverse("accounts:login"),
            {"identifier": "BUDI@example.com", "password": "rahasia1"},
            format="json",
        )
        self.assertEqual(login.status_code, status.HTTP_200_OK)
        self.assertEqual(login.data["user"]["id"], first.data["id"])

    def test_stored_mixed_case_email_conflicts(self):
        # Users created outside the API (createsuperuser, admin) keep their casing.
        User.objects.create_user(
            username="legacy",
            password="rahasia1",
            email="Legacy@Example.com",
            phone_number="081311112222",
            full_name="Legacy User",
        )
        response = self.client.post(
            self.register_url,
            _registration_payload(email="legacy@example.com"),
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertIn("email", response.data["detail"])
