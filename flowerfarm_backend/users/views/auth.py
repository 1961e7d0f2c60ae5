"""
PATH: users/views/auth.py

SESSION LOGIN / LOGOUT

- POST /api/auth/login/   username (or email) + password -> session cookie
- POST /api/auth/logout/  ends the session and drops the dev-mode flag

The gate sends blocked visitors to the login page with ?next=<location>.
Login echoes that location back as redirect_to (only if it is a local URL),
so the frontend can return the visitor to where they were going.
"""

from __future__ import annotations

import logging

from django.contrib.auth import authenticate, login, logout
from django.utils.http import url_has_allowed_host_and_scheme
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle
from rest_framework.views import APIView

from persistence.keys import DEV_MODE_KEY
from persistence.stores import visitor_store
from users.serializers import LoginResponseSerializer, LoginSerializer

logger = logging.getLogger(__name__)

DEFAULT_REDIRECT = "/"


class LoginThrottle(AnonRateThrottle):
    scope = "public_write"


def safe_redirect_target(request, candidate: str | None) -> str:
    candidate = (candidate or "").strip()
    if not candidate:
        return DEFAULT_REDIRECT

    if url_has_allowed_host_and_scheme(
        candidate,
        allowed_hosts={request.get_host()},
        require_https=request.is_secure(),
    ):
        return candidate

    logger.warning("Discarding unsafe login redirect", extra={"next": candidate})
    return DEFAULT_REDIRECT


# ---------------------------
# VIEWS
# ---------------------------


class LoginView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [LoginThrottle]
    serializer_class = LoginSerializer

    @extend_schema(
        request=LoginSerializer,
        responses={200: LoginResponseSerializer},
        description="Start an admin session; redirect_to echoes the gate's ?next=",
    )
    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        user = authenticate(
            request=request,
            username=data["username"],
            password=data["password"],
        )

        if not user:
            logger.info("Login rejected", extra={"username": data["username"]})
            return Response(
                {"detail": "Invalid credentials"},
                status=status.HTTP_401_UNAUTHORIZED,
            )

        login(request, user)
        next_location = data.get("next") or request.query_params.get("next")

        return Response(
            {
                "message": "Login successful",
                "username": user.get_username(),
                "redirect_to": safe_redirect_target(request, next_location),
            }
        )


class LogoutView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(request=None, responses={204: None})
    def post(self, request):
        visitor_store(request).remove_item(DEV_MODE_KEY)
        logout(request)
        return Response(status=status.HTTP_204_NO_CONTENT)
