# uistate/registry.py

"""
Scope registry handed to the uistate views through as_view().
Scopes live in the shared cache (settings.SHARED_STORE_CACHE_ALIAS) so any
worker can answer for them. Idle scopes expire after
settings.UI_STATE_SCOPE_TIMEOUT seconds.
"""

from django.conf import settings

from uistate.services.scoped_store import ViewScopeRegistry

view_scopes = ViewScopeRegistry(
    getattr(settings, "SHARED_STORE_CACHE_ALIAS", "default"),
    timeout=getattr(settings, "UI_STATE_SCOPE_TIMEOUT", 24 * 60 * 60),
)
