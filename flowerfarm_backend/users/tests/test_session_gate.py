# users/tests/test_session_gate.py

from __future__ import annotations

from urllib.parse import parse_qs, urlsplit

from django.test import SimpleTestCase, override_settings

from persistence.keys import DEV_MODE_KEY
from persistence.stores import InMemoryKeyValueStore
from users.services.session_gate import (
    GateConfig,
    GateOutcome,
    evaluate_gate,
    has_bypass_marker,
)

DEV = GateConfig(dev_bypass_enabled=True, login_url="/login", protected_prefixes=("/api/admin/",))
PROD = GateConfig(dev_bypass_enabled=False, login_url="/login", protected_prefixes=("/api/admin/",))


class SessionGateTests(SimpleTestCase):
    """
    GUARANTEES:
    - protected content is allowed iff authenticated or the bypass flag is stored
    - blocked visitors are sent to login with the requested location in ?next=
    - the bypass marker writes the flag and sends the visitor to the clean path
    """

    def _evaluate(self, *, auth=False, path="/api/admin/orders/", qs="", store=None, config=DEV):
        return evaluate_gate(
            is_authenticated=auth,
            path=path,
            query_string=qs,
            store=store if store is not None else InMemoryKeyValueStore(),
            config=config,
        )

    def test_authenticated_is_allowed(self):
        decision = self._evaluate(auth=True)
        self.assertIs(decision.outcome, GateOutcome.ALLOW)
        self.assertTrue(decision.allowed)

    def test_anonymous_goes_to_login_with_origin(self):
        decision = self._evaluate(qs="page=2&sort=date")

        self.assertIs(decision.outcome, GateOutcome.LOGIN)
        parts = urlsplit(decision.location)
        self.assertEqual(parts.path, "/login")
        self.assertEqual(parse_qs(parts.query)["next"], ["/api/admin/orders/?page=2&sort=date"])

    def test_login_url_with_query_gets_ampersand(self):
        config = GateConfig(login_url="/login?tab=admin")
        decision = self._evaluate(config=config)
        self.assertTrue(decision.location.startswith("/login?tab=admin&next="))

    def test_bypass_marker_writes_flag_and_reloads_clean_path(self):
        store = InMemoryKeyValueStore()
        decision = self._evaluate(qs="devMode=true", store=store)

        self.assertIs(decision.outcome, GateOutcome.RELOAD)
        self.assertEqual(decision.location, "/api/admin/orders/")
        self.assertEqual(store.get_item(DEV_MODE_KEY), "true")

    def test_stored_flag_allows_after_reload(self):
        store = InMemoryKeyValueStore()
        self._evaluate(qs="devMode=true", store=store)

        decision = self._evaluate(store=store)
        self.assertIs(decision.outcome, GateOutcome.ALLOW)

    def test_bypass_disabled_ignores_marker_and_flag(self):
        store = InMemoryKeyValueStore({DEV_MODE_KEY: "true"})
        decision = self._evaluate(qs="devMode=true", store=store, config=PROD)

        self.assertIs(decision.outcome, GateOutcome.LOGIN)

    def test_bypass_disabled_does_not_write_flag(self):
        store = InMemoryKeyValueStore()
        self._evaluate(qs="devMode=true", store=store, config=PROD)
        self.assertIsNone(store.get_item(DEV_MODE_KEY))

    def test_marker_requires_real_parameter(self):
        self.assertTrue(has_bypass_marker("devMode=true"))
        self.assertTrue(has_bypass_marker("a=1&devMode=TRUE"))
        self.assertFalse(has_bypass_marker("notdevMode=true"))
        self.assertFalse(has_bypass_marker("devMode=false"))
        self.assertFalse(has_bypass_marker("q=devMode%3Dtrue"))
        self.assertFalse(has_bypass_marker(""))

    def test_protects_prefixes(self):
        self.assertTrue(DEV.protects("/api/admin/pending-emails/"))
        self.assertFalse(DEV.protects("/api/customer/"))

    @override_settings(
        DEV_MODE_BYPASS_ENABLED=True,
        LOGIN_URL="/shop/login",
        SESSION_GATE_PROTECTED_PREFIXES=["/dash/"],
    )
    def test_config_from_settings(self):
        config = GateConfig.from_settings()
        self.assertTrue(config.dev_bypass_enabled)
        self.assertEqual(config.login_url, "/shop/login")
        self.assertEqual(config.protected_prefixes, ("/dash/",))
