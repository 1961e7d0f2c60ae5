# persistence/tests/test_stores.py

from __future__ import annotations

from django.contrib.sessions.backends.signed_cookies import SessionStore
from django.core.cache import cache
from django.test import SimpleTestCase, override_settings

from persistence.services.exceptions import StorageQuotaExceeded
from persistence.stores import (
    SESSION_KEY_PREFIX,
    CacheKeyValueStore,
    InMemoryKeyValueStore,
    SessionKeyValueStore,
)


class InMemoryKeyValueStoreTests(SimpleTestCase):
    def test_get_set_remove(self):
        store = InMemoryKeyValueStore()
        self.assertIsNone(store.get_item("a"))

        store.set_item("a", "1")
        self.assertEqual(store.get_item("a"), "1")

        store.remove_item("a")
        store.remove_item("a")
        self.assertIsNone(store.get_item("a"))

    def test_rejects_non_text_values(self):
        with self.assertRaises(TypeError):
            InMemoryKeyValueStore().set_item("a", 1)

    def test_quota_counts_keys_and_values(self):
        store = InMemoryKeyValueStore(quota=10)
        store.set_item("ab", "cdef")
        with self.assertRaises(StorageQuotaExceeded):
            store.set_item("gh", "ijkl")
        # overwriting an existing key only counts the new value
        store.set_item("ab", "cdefghij")
        self.assertEqual(store.get_item("ab"), "cdefghij")


class SessionKeyValueStoreTests(SimpleTestCase):
    def test_keys_are_prefixed_in_session(self):
        session = SessionStore()
        store = SessionKeyValueStore(session)

        store.set_item("customerData", "{}")

        self.assertEqual(session[SESSION_KEY_PREFIX + "customerData"], "{}")
        self.assertNotIn("customerData", session)
        self.assertEqual(store.get_item("customerData"), "{}")

        store.remove_item("customerData")
        self.assertIsNone(store.get_item("customerData"))


@override_settings(
    CACHES={"default": {"BACKEND": "django.core.cache.backends.locmem.LocMemCache"}}
)
class CacheKeyValueStoreTests(SimpleTestCase):
    def tearDown(self):
        cache.clear()

    def test_writes_are_visible_to_other_instances(self):
        CacheKeyValueStore().set_item("manualEmails", "[]")
        self.assertEqual(CacheKeyValueStore().get_item("manualEmails"), "[]")

    def test_prefix_isolates_namespaces(self):
        CacheKeyValueStore(prefix="a:").set_item("k", "1")
        self.assertIsNone(CacheKeyValueStore(prefix="b:").get_item("k"))

    def test_remove(self):
        store = CacheKeyValueStore()
        store.set_item("k", "1")
        store.remove_item("k")
        self.assertIsNone(store.get_item("k"))
