# persistence/services/email_queue.py

"""
EMAIL QUEUE ADAPTER

Two JSON arrays of order-email records:
- pendingOrderEmails: confirmations the storefront could not get delivered
- manualEmails: the admin's to-do list (status "pending" -> "sent")

Each record is identified by its "orderId". add() appends without looking for
an existing entry, so duplicates can exist until remove() filters them out.
remove() is an exact-match filter over both arrays and keeps the order of the
records it leaves behind.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable
from typing import Any

from persistence.keys import (
    EMAIL_QUEUE_KEYS,
    MANUAL_EMAILS_KEY,
    PENDING_ORDER_EMAILS_KEY,
)
from persistence.services.customer_data import iso_timestamp
from persistence.stores import KeyValueStore

logger = logging.getLogger(__name__)

STATUS_PENDING = "pending"
STATUS_SENT = "sent"


class EmailQueueStore:
    def __init__(self, store: KeyValueStore, *, clock: Callable[[], str] = iso_timestamp):
        self.store = store
        self.clock = clock

    # -----------------------------
    # Reads
    # -----------------------------

    def records(self, key: str = PENDING_ORDER_EMAILS_KEY) -> list[dict[str, Any]]:
        try:
            raw = self.store.get_item(key)
            records = json.loads(raw) if raw else []
        except Exception:
            logger.exception("Error reading email queue", extra={"key": key})
            return []

        if not isinstance(records, list):
            logger.warning("Email queue is not an array", extra={"key": key})
            return []
        return [r for r in records if isinstance(r, dict)]

    def pending(self) -> list[dict[str, Any]]:
        return [r for r in self.records(MANUAL_EMAILS_KEY) if r.get("status") == STATUS_PENDING]

    def contains(self, order_id: str, key: str = PENDING_ORDER_EMAILS_KEY) -> bool:
        return any(r.get("orderId") == order_id for r in self.records(key))

    # -----------------------------
    # Writes
    # -----------------------------

    def _write(self, key: str, records: list[dict[str, Any]]) -> bool:
        try:
            self.store.set_item(key, json.dumps(records))
            return True
        except Exception:
            logger.exception("Error writing email queue", extra={"key": key})
            return False

    def add(self, record: dict[str, Any], key: str = PENDING_ORDER_EMAILS_KEY) -> bool:
        if not record.get("orderId"):
            logger.warning("Refusing email record without orderId", extra={"key": key})
            return False
        records = self.records(key)
        records.append(dict(record))
        return self._write(key, records)

    def enqueue(self, record: dict[str, Any]) -> bool:
        """Queue a failed confirmation in both arrays, flagged pending for the admin."""
        entry = {"date": self.clock(), **record, "status": STATUS_PENDING}
        ok = self.add(entry, PENDING_ORDER_EMAILS_KEY)
        return self.add(entry, MANUAL_EMAILS_KEY) and ok

    def remove(self, order_id: str, keys: Iterable[str] = EMAIL_QUEUE_KEYS) -> bool:
        ok = True
        for key in keys:
            records = self.records(key)
            kept = [r for r in records if r.get("orderId") != order_id]
            if len(kept) == len(records):
                continue
            ok = self._write(key, kept) and ok

        logger.info("Cleared queued emails", extra={"order_id": order_id, "ok": ok})
        return ok

    def mark_sent(self, order_id: str) -> bool:
        records = self.records(MANUAL_EMAILS_KEY)
        changed = False
        sent_at = self.clock()
        for record in records:
            if record.get("orderId") == order_id:
                record["status"] = STATUS_SENT
                record["sentDate"] = sent_at
                changed = True

        if not changed:
            return False
        return self._write(MANUAL_EMAILS_KEY, records)
