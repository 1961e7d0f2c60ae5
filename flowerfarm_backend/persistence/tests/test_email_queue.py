# persistence/tests/test_email_queue.py

from __future__ import annotations

from django.test import SimpleTestCase

from persistence.keys import MANUAL_EMAILS_KEY, PENDING_ORDER_EMAILS_KEY
from persistence.services.email_queue import EmailQueueStore
from persistence.stores import InMemoryKeyValueStore


def _fixed_clock():
    return "2025-05-01T10:00:00.000Z"


class EmailQueueStoreTests(SimpleTestCase):
    def setUp(self):
        self.store = InMemoryKeyValueStore()
        self.queue = EmailQueueStore(self.store, clock=_fixed_clock)

    def _ids(self, key=PENDING_ORDER_EMAILS_KEY):
        return [r["orderId"] for r in self.queue.records(key)]

    def test_remove_filters_only_matching_order(self):
        for order_id in ["ORD-1", "ORD-2", "ORD-1", "ORD-3"]:
            self.queue.add({"orderId": order_id})

        self.assertTrue(self.queue.remove("ORD-1"))
        self.assertEqual(self._ids(), ["ORD-2", "ORD-3"])

    def test_remove_applies_to_both_arrays(self):
        self.queue.enqueue({"orderId": "ORD-2025-1018-3384", "customerName": "Sam"})
        self.queue.enqueue({"orderId": "ORD-7"})

        self.queue.remove("ORD-2025-1018-3384")

        self.assertEqual(self._ids(PENDING_ORDER_EMAILS_KEY), ["ORD-7"])
        self.assertEqual(self._ids(MANUAL_EMAILS_KEY), ["ORD-7"])

    def test_remove_unknown_order_is_noop(self):
        self.queue.add({"orderId": "ORD-1"})
        self.assertTrue(self.queue.remove("ORD-404"))
        self.assertEqual(self._ids(), ["ORD-1"])

    def test_add_keeps_duplicates(self):
        self.queue.add({"orderId": "ORD-1"})
        self.queue.add({"orderId": "ORD-1"})
        self.assertEqual(self._ids(), ["ORD-1", "ORD-1"])

    def test_add_requires_order_id(self):
        with self.assertLogs("persistence.services.email_queue", level="WARNING"):
            self.assertFalse(self.queue.add({"customerEmail": "sam@x.com"}))
        self.assertEqual(self.queue.records(), [])

    def test_enqueue_marks_pending_with_date(self):
        self.queue.enqueue({"orderId": "ORD-1", "status": "sent"})

        pending = self.queue.pending()
        self.assertEqual(len(pending), 1)
        self.assertEqual(pending[0]["status"], "pending")
        self.assertEqual(pending[0]["date"], "2025-05-01T10:00:00.000Z")

    def test_mark_sent_moves_record_out_of_pending(self):
        self.queue.enqueue({"orderId": "ORD-1"})
        self.queue.enqueue({"orderId": "ORD-2"})

        self.assertTrue(self.queue.mark_sent("ORD-1"))

        self.assertEqual([r["orderId"] for r in self.queue.pending()], ["ORD-2"])
        sent = self.queue.records(MANUAL_EMAILS_KEY)[0]
        self.assertEqual(sent["status"], "sent")
        self.assertEqual(sent["sentDate"], "2025-05-01T10:00:00.000Z")

    def test_mark_sent_unknown_order_is_false(self):
        self.assertFalse(self.queue.mark_sent("ORD-404"))

    def test_corrupt_array_reads_as_empty(self):
        self.store.set_item(PENDING_ORDER_EMAILS_KEY, "[{oops")
        with self.assertLogs("persistence.services.email_queue", level="ERROR"):
            self.assertEqual(self.queue.records(), [])

    def test_non_array_reads_as_empty(self):
        self.store.set_item(PENDING_ORDER_EMAILS_KEY, '{"orderId": "ORD-1"}')
        self.assertEqual(self.queue.records(), [])

    def test_contains(self):
        self.queue.add({"orderId": "ORD-1"})
        self.assertTrue(self.queue.contains("ORD-1"))
        self.assertFalse(self.queue.contains("ORD-2"))
