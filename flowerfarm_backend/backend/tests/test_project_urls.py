# backend/tests/test_project_urls.py

from __future__ import annotations

from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient


class ProjectUrlTests(TestCase):
    def setUp(self):
        self.client = APIClient()

    def test_health_reports_db_and_cache(self):
        res = self.client.get(reverse("health-check"))

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data, {"status": "ok", "db": "ok", "cache": "ok"})

    def test_api_root_lists_modules(self):
        res = self.client.get(reverse("api-root"))

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["modules"]["customer"], "/api/customer/")

    def test_schema_builds(self):
        res = self.client.get(reverse("schema"))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
