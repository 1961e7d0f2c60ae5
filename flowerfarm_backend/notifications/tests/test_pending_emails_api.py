# notifications/tests/test_pending_emails_api.py

from __future__ import annotations

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.cache import caches
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from persistence.keys import MANUAL_EMAILS_KEY, PENDING_ORDER_EMAILS_KEY
from persistence.services.email_queue import EmailQueueStore
from persistence.stores import shared_store

User = get_user_model()


class PendingEmailApiTests(TestCase):
    """
    Visitors queue records publicly; only a signed-in admin sees them.
    """

    def setUp(self):
        caches[settings.SHARED_STORE_CACHE_ALIAS].clear()
        self.queue = EmailQueueStore(shared_store())

        self.visitor = APIClient()
        self.admin = APIClient()
        self.admin.force_login(User.objects.create_user(username="farmer", password="pass1234"))

    def _queue_via_api(self, order_id):
        return self.visitor.post(
            reverse("notifications:pending-email-create"),
            {"orderId": order_id, "customerName": "Sam", "customerEmail": "sam@example.com"},
            format="json",
        )

    def test_public_enqueue_writes_both_arrays(self):
        res = self._queue_via_api("ORD-1")

        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertTrue(self.queue.contains("ORD-1", PENDING_ORDER_EMAILS_KEY))
        self.assertEqual(self.queue.records(MANUAL_EMAILS_KEY)[0]["status"], "pending")

    def test_enqueue_requires_order_id(self):
        res = self.visitor.post(
            reverse("notifications:pending-email-create"), {"customerName": "Sam"}, format="json"
        )
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_admin_list_is_gated(self):
        url = reverse("notifications-admin:pending-email-list")

        res = self.visitor.get(url)

        self.assertEqual(res.status_code, status.HTTP_302_FOUND)
        self.assertTrue(res["Location"].startswith(settings.LOGIN_URL))

    def test_admin_lists_marks_and_removes(self):
        self._queue_via_api("ORD-1")
        self._queue_via_api("ORD-2")

        res = self.admin.get(reverse("notifications-admin:pending-email-list"))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual([r["orderId"] for r in res.data["results"]], ["ORD-1", "ORD-2"])

        res = self.admin.post(reverse("notifications-admin:pending-email-sent", args=["ORD-1"]))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["status"], "sent")

        res = self.admin.delete(reverse("notifications-admin:pending-email-detail", args=["ORD-2"]))
        self.assertEqual(res.status_code, status.HTTP_204_NO_CONTENT)

        self.assertEqual(self.admin.get(reverse("notifications-admin:pending-email-list")).data["count"], 0)
        self.assertFalse(self.queue.contains("ORD-2", PENDING_ORDER_EMAILS_KEY))
        self.assertTrue(self.queue.contains("ORD-1", PENDING_ORDER_EMAILS_KEY))

    def test_mark_sent_unknown_order_is_404(self):
        res = self.admin.post(reverse("notifications-admin:pending-email-sent", args=["nope"]))
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
