# backend/urls.py
"""
PROJECT URLS

All API routes live under /api/

- /api/customer/        visitor's saved checkout details (session store)
- /api/auth/            session login / logout / me
- /api/ui-state/        scoped scroll + pagination state
- /api/notifications/   storefront email relay (order, invoice, contact)
- /api/admin/           admin-only routes, behind the session gate

Security hardening:
- Django admin path configurable via env var (ADMIN_PATH)
  to reduce bot scanning/noise and narrow attack surface.
"""

from __future__ import annotations

from django.conf import settings
from django.contrib import admin
from django.core.cache import caches
from django.db import connections
from django.db.utils import OperationalError
from django.urls import include, path
from django.views.generic import RedirectView
from drf_spectacular.utils import extend_schema
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response


# ------------------ API ROOT (PUBLIC) ------------------
@extend_schema(
    responses={
        200: {
            "type": "object",
            "properties": {
                "message": {"type": "string"},
                "auth": {"type": "object"},
                "docs": {"type": "object"},
                "modules": {"type": "object"},
            },
        }
    },
)
@api_view(["GET"])
@permission_classes([AllowAny])
def api_root(request):
    return Response(
        {
            "message": "Flower Farm Backend API is running",
            "auth": {
                "login": "/api/auth/login/",
                "logout": "/api/auth/logout/",
                "me": "/api/auth/me/",
            },
            "docs": {
                "swagger": "/api/docs/",
                "schema": "/api/schema/",
            },
            "modules": {
                "customer": "/api/customer/",
                "ui_state": "/api/ui-state/scopes/",
                "notifications": "/api/notifications/",
                "admin": "/api/admin/pending-emails/",
            },
        }
    )


# ------------------ HEALTH CHECK (PUBLIC) ------------------
@extend_schema(
    responses={
        200: {
            "type": "object",
            "properties": {
                "status": {"type": "string"},
                "db": {"type": "string"},
                "cache": {"type": "string"},
            },
        },
        503: {
            "type": "object",
            "properties": {
                "status": {"type": "string"},
                "db": {"type": "string"},
                "cache": {"type": "string"},
                "error": {"type": "string"},
            },
        },
    },
)
@api_view(["GET"])
@permission_classes([AllowAny])
def health_check(request):
    """
    Minimal operational endpoint:
    - Confirms app is responding
    - Confirms DB connection + simple query works
    - Confirms the shared store's cache answers
    """
    try:
        conn = connections["default"]
        with conn.cursor() as cursor:
            cursor.execute("SELECT 1;")
            cursor.fetchone()
    except OperationalError as e:
        return Response(
            {"status": "degraded", "db": "down", "cache": "unknown", "error": str(e)},
            status=503,
        )

    try:
        shared = caches[settings.SHARED_STORE_CACHE_ALIAS]
        shared.set("health:ping", "1", timeout=5)
        cache_ok = shared.get("health:ping") == "1"
    except Exception as e:
        return Response(
            {"status": "degraded", "db": "ok", "cache": "down", "error": str(e)},
            status=503,
        )

    if not cache_ok:
        return Response({"status": "degraded", "db": "ok", "cache": "down"}, status=503)
    return Response({"status": "ok", "db": "ok", "cache": "ok"})


# ------------------ ADMIN PATH (HARDENED) ------------------
# Default is the legacy /admin/ to avoid breaking local setups.
# In production, set ADMIN_PATH to something non-obvious, e.g.:
#   ADMIN_PATH=control-panel-9f3k/
#
# IMPORTANT:
# - Keep trailing slash.
# - Do NOT expose the chosen path in public docs.
ADMIN_PATH = getattr(settings, "ADMIN_PATH", "admin/")
if not ADMIN_PATH.endswith("/"):
    ADMIN_PATH = f"{ADMIN_PATH}/"


# ------------------ API ROUTES (ALL UNDER /api/) ------------------
api_urlpatterns = [
    # Health check / root
    path("", api_root, name="api-root"),
    path("health/", health_check, name="health-check"),
    # OpenAPI / Swagger
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    path("docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    # Session auth
    path("auth/", include("users.urls")),
    # Storefront
    path("customer/", include("persistence.urls")),
    path("ui-state/", include("uistate.urls")),
    path("notifications/", include("notifications.urls")),
    # Gated admin routes (SessionGateMiddleware)
    path("admin/", include("notifications.admin_urls")),
]

urlpatterns = [
    # Hardened admin path
    path(ADMIN_PATH, admin.site.urls),
    # Root convenience: visiting / takes you to Swagger docs
    path("", RedirectView.as_view(url="/api/docs/", permanent=False), name="root"),
    path("api/", include(api_urlpatterns)),
]
