# users/services/session_gate.py

"""
SESSION GATE

Decides what happens to a request for a protected location.

Inputs:
- is_authenticated (owned by Django's session auth, not by the gate)
- the requested path + raw query string
- the visitor's key-value store (holds the devMode bypass flag)
- GateConfig, resolved once at startup from settings

Outcomes:
- RELOAD: the bypass marker is on the URL and the bypass is enabled.
  The flag is written to the visitor store and the caller is sent back to the
  same path without the query, so the bypass applies from a clean URL.
- ALLOW:  authenticated, or bypass enabled and the stored flag is "true".
- LOGIN:  everything else. The login URL carries the originally requested
  location in ?next= so the login flow can send the visitor back.

The gate never moves a visitor from allowed back to blocked. Logging out or
session expiry is handled by Django auth.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from urllib.parse import urlencode

from django.conf import settings
from django.http import QueryDict

from persistence.keys import DEV_MODE_KEY
from persistence.stores import KeyValueStore

logger = logging.getLogger(__name__)

BYPASS_VALUE = "true"


class GateOutcome(str, enum.Enum):
    ALLOW = "allow"
    LOGIN = "login"
    RELOAD = "reload"


@dataclass(frozen=True)
class GateConfig:
    dev_bypass_enabled: bool = False
    login_url: str = "/login"
    protected_prefixes: tuple[str, ...] = ()
    bypass_param: str = DEV_MODE_KEY
    bypass_store_key: str = DEV_MODE_KEY

    @classmethod
    def from_settings(cls) -> "GateConfig":
        prefixes = getattr(settings, "SESSION_GATE_PROTECTED_PREFIXES", ()) or ()
        return cls(
            dev_bypass_enabled=bool(getattr(settings, "DEV_MODE_BYPASS_ENABLED", False)),
            login_url=str(getattr(settings, "LOGIN_URL", "/login")),
            protected_prefixes=tuple(str(p) for p in prefixes),
        )

    def protects(self, path: str) -> bool:
        return any(path.startswith(prefix) for prefix in self.protected_prefixes)


@dataclass(frozen=True)
class GateDecision:
    outcome: GateOutcome
    location: str = ""

    @property
    def allowed(self) -> bool:
        return self.outcome is GateOutcome.ALLOW


def has_bypass_marker(query_string: str, param: str = DEV_MODE_KEY) -> bool:
    """True only for an actual ?devMode=true parameter, not a substring match."""
    query = QueryDict(query_string or "")
    return any(value.strip().lower() == BYPASS_VALUE for value in query.getlist(param))


def requested_location(path: str, query_string: str = "") -> str:
    return f"{path}?{query_string}" if query_string else path


def login_location(login_url: str, next_location: str) -> str:
    sep = "&" if "?" in login_url else "?"
    return f"{login_url}{sep}{urlencode({'next': next_location})}"


def bypass_active(store: KeyValueStore, config: GateConfig) -> bool:
    if not config.dev_bypass_enabled:
        return False
    return store.get_item(config.bypass_store_key) == BYPASS_VALUE


def evaluate_gate(
    *,
    is_authenticated: bool,
    path: str,
    query_string: str,
    store: KeyValueStore,
    config: GateConfig,
) -> GateDecision:
    if config.dev_bypass_enabled and has_bypass_marker(query_string, config.bypass_param):
        store.set_item(config.bypass_store_key, BYPASS_VALUE)
        logger.warning("Dev-mode bypass established", extra={"path": path})
        return GateDecision(GateOutcome.RELOAD, location=path)

    if is_authenticated or bypass_active(store, config):
        return GateDecision(GateOutcome.ALLOW)

    origin = requested_location(path, query_string)
    return GateDecision(
        GateOutcome.LOGIN,
        location=login_location(config.login_url, origin),
    )
