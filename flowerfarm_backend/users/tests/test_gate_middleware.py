# users/tests/test_gate_middleware.py

from __future__ import annotations

from urllib.parse import parse_qs, urlsplit

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.cache import caches
from django.test import TestCase, override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

User = get_user_model()


@override_settings(DEV_MODE_BYPASS_ENABLED=False, LOGIN_URL="/login")
class GateMiddlewareTests(TestCase):
    def setUp(self):
        caches[settings.SHARED_STORE_CACHE_ALIAS].clear()
        self.client = APIClient()
        self.url = reverse("notifications-admin:pending-email-list")

    def test_anonymous_redirected_with_next(self):
        res = self.client.get(self.url, {"page": "2"})

        self.assertEqual(res.status_code, status.HTTP_302_FOUND)
        location = urlsplit(res["Location"])
        self.assertEqual(location.path, "/login")
        self.assertEqual(parse_qs(location.query)["next"], [f"{self.url}?page=2"])

    def test_authenticated_passes(self):
        self.client.force_login(User.objects.create_user(username="farmer", password="pass1234"))
        self.assertEqual(self.client.get(self.url).status_code, status.HTTP_200_OK)

    def test_unprotected_paths_untouched(self):
        res = self.client.get(reverse("persistence:customer-data"))
        self.assertEqual(res.status_code, status.HTTP_200_OK)

    def test_marker_ignored_when_bypass_disabled(self):
        res = self.client.get(self.url, {"devMode": "true"})

        self.assertEqual(res.status_code, status.HTTP_302_FOUND)
        self.assertTrue(res["Location"].startswith("/login?"))


@override_settings(DEV_MODE_BYPASS_ENABLED=True, LOGIN_URL="/login")
class DevModeBypassTests(TestCase):
    def setUp(self):
        caches[settings.SHARED_STORE_CACHE_ALIAS].clear()
        self.client = APIClient()
        self.url = reverse("notifications-admin:pending-email-list")

    def test_marker_reloads_clean_url_then_allows(self):
        res = self.client.get(self.url, {"devMode": "true", "tab": "emails"})

        self.assertEqual(res.status_code, status.HTTP_302_FOUND)
        self.assertEqual(res["Location"], self.url)

        self.assertEqual(self.client.get(self.url).status_code, status.HTTP_200_OK)
        self.assertTrue(self.client.get(reverse("users:me")).data["dev_bypass"])

    def test_lookalike_parameter_is_not_a_marker(self):
        res = self.client.get(self.url, {"notdevMode": "true"})

        self.assertEqual(res.status_code, status.HTTP_302_FOUND)
        self.assertTrue(res["Location"].startswith("/login?"))

    def test_flag_is_per_visitor(self):
        self.client.get(self.url, {"devMode": "true"})

        other = APIClient()
        self.assertEqual(other.get(self.url).status_code, status.HTTP_302_FOUND)

    def test_logout_drops_the_flag(self):
        self.client.get(self.url, {"devMode": "true"})
        self.client.post(reverse("users:logout"))

        self.assertEqual(self.client.get(self.url).status_code, status.HTTP_302_FOUND)
