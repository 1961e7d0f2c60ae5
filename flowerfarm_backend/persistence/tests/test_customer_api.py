# persistence/tests/test_customer_api.py

from __future__ import annotations

from unittest import mock

from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient


class CustomerDataApiTests(TestCase):
    """
    The visitor's record follows the session cookie, so one APIClient
    behaves like one returning browser.
    """

    def setUp(self):
        self.client = APIClient()
        self.url = reverse("persistence:customer-data")

    def test_empty_session_has_no_record(self):
        res = self.client.get(self.url)
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertIsNone(res.data["customer"])

    def test_posts_merge_across_requests(self):
        self.client.post(self.url, {"name": "Sam"}, format="json")
        res = self.client.post(self.url, {"email": "sam@x.com"}, format="json")

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        customer = res.data["customer"]
        self.assertEqual(customer["name"], "Sam")
        self.assertEqual(customer["email"], "sam@x.com")
        self.assertTrue(customer["lastUpdated"].endswith("Z"))

        self.assertEqual(self.client.get(self.url).data["customer"], customer)

    def test_records_are_per_visitor(self):
        self.client.post(self.url, {"name": "Sam"}, format="json")
        other = APIClient()
        self.assertIsNone(other.get(self.url).data["customer"])

    def test_delete_clears_record(self):
        self.client.post(self.url, {"name": "Sam"}, format="json")
        res = self.client.delete(self.url)

        self.assertEqual(res.status_code, status.HTTP_204_NO_CONTENT)
        self.assertIsNone(self.client.get(self.url).data["customer"])

    def test_non_object_body_rejected(self):
        res = self.client.post(self.url, ["Sam"], format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_save_failure_is_reported(self):
        with mock.patch(
            "persistence.views.customer.CustomerDataStore.save", return_value=False
        ):
            res = self.client.post(self.url, {"name": "Sam"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_507_INSUFFICIENT_STORAGE)

    def test_form_encoded_body_rejected(self):
        res = self.client.post(self.url, {"name": "Sam"}, format="multipart")

        self.assertEqual(res.status_code, status.HTTP_415_UNSUPPORTED_MEDIA_TYPE)
        self.assertIsNone(self.client.get(self.url).data["customer"])
