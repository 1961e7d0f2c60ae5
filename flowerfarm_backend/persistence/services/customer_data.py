# persistence/services/customer_data.py

"""
CUSTOMER DATA ADAPTER

Keeps the visitor's checkout profile (name, contact info, preferences)
under the fixed "customerData" key.

Rules:
- save() is a shallow merge onto whatever is stored, never a replacement
- lastUpdated is refreshed on every successful save
- failures are logged and reported as False / None, never raised
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from datetime import timezone as dt_timezone
from typing import Any

from django.utils import timezone

from persistence.keys import CUSTOMER_DATA_KEY
from persistence.stores import KeyValueStore

logger = logging.getLogger(__name__)


def iso_timestamp(moment=None) -> str:
    """UTC timestamp in the client's toISOString() shape, e.g. 2025-05-01T10:00:00.000Z"""
    moment = moment or timezone.now()
    return moment.astimezone(dt_timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


class CustomerDataStore:
    def __init__(
        self,
        store: KeyValueStore,
        *,
        key: str = CUSTOMER_DATA_KEY,
        clock: Callable[[], str] = iso_timestamp,
    ):
        self.store = store
        self.key = key
        self.clock = clock

    def save(self, record: dict[str, Any]) -> bool:
        try:
            merged = {**(self.load() or {}), **dict(record), "lastUpdated": self.clock()}
            self.store.set_item(self.key, json.dumps(merged))
            return True
        except Exception:
            logger.exception("Error saving customer data", extra={"key": self.key})
            return False

    def load(self) -> dict[str, Any] | None:
        try:
            raw = self.store.get_item(self.key)
            if raw is None:
                return None
            data = json.loads(raw)
        except Exception:
            logger.exception("Error getting customer data", extra={"key": self.key})
            return None

        if not isinstance(data, dict):
            logger.warning("Stored customer data is not an object", extra={"key": self.key})
            return None
        return data

    def clear(self) -> bool:
        try:
            self.store.remove_item(self.key)
            return True
        except Exception:
            logger.exception("Error clearing customer data", extra={"key": self.key})
            return False
