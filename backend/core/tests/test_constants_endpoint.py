"""
Integration tests for ``GET /api/core/constants/``.
"""

from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient


class TestSystemConstantsEndpoint(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.url = reverse("core:system-constants")

    def test_public_and_complete(self):
        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            set(response.data),
            {
                "roles",
                "report_categories",
                "report_statuses",
                "suggestion_categories",
                "suggestion_statuses",
                "report_workflow",
                "suggestion_workflow",
                "limits",
            },
        )

    def test_roles_carry_labels(self):
        response = self.client.get(self.url)
        self.assertIn({"value": "officer", "label": "Petugas"}, response.data["roles"])

    def test_report_workflow_table(self):
        response = self.client.get(self.url)
        rows = {row["status"]: row for row in response.data["report_workflow"]}

        self.assertEqual(list(rows), ["pending", "in_progress", "resolved", "rejected"])
        self.assertEqual(rows["pending"]["allowed_next"], ["in_progress", "rejected"])
        self.assertTrue(rows["resolved"]["is_terminal"])
        self.assertFalse(rows["in_progress"]["is_terminal"])

    def test_suggestion_workflow_table(self):
        response = self.client.get(self.url)
        rows = {row["status"]: row for row in response.data["suggestion_workflow"]}
        self.assertEqual(rows["pending"]["allowed_next"], ["approved", "rejected"])
        self.assertTrue(rows["approved"]["is_terminal"])

    def test_limits(self):
        response = self.client.get(self.url)
        self.assertEqual(
            response.data["limits"],
            {
                "report_response_min_length": 10,
                "suggestion_response_min_length": 1,
                "suggestion_description_min_length": 10,
            },
        )
