# notifications/views/relay.py

"""
RELAY VIEW BASE

Shared HTTP contract for the storefront's email relay endpoints:

- every response carries permissive CORS headers (the storefront may be
  served from another origin than the API)
- OPTIONS -> 204, empty body
- any other non-POST method -> 405 {"success": false, "error": "Method not allowed"}
- bad input -> 400 {"success": false, "error": "<first validation message>"}

Project-wide CORS (django-cors-headers) is configured to skip these paths,
so the headers below are the only ones the relay sends.
"""

from __future__ import annotations

import logging

from rest_framework import exceptions, serializers, status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.settings import api_settings
from rest_framework.throttling import AnonRateThrottle
from rest_framework.views import APIView

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "*",
    "Access-Control-Max-Age": "3600",
}


class RelayThrottle(AnonRateThrottle):
    scope = "public_write"


def _default_messages(field) -> dict:
    messages = {}
    for cls in reversed(type(field).__mro__):
        messages.update(getattr(cls, "default_error_messages", {}))
    return messages


def _is_custom_message(field, message: str) -> bool:
    """True when the field declares this exact text in its own error_messages."""
    defaults = _default_messages(field)
    return any(
        str(text) == message and str(defaults.get(key, "")) != str(text)
        for key, text in getattr(field, "error_messages", {}).items()
    )


def first_error(errors, serializer=None) -> str:
    """
    Flatten DRF's nested error structure down to one readable message.

    Default messages get a "field: " prefix. Messages a field declares itself
    (error_messages=...) are already written for the client and pass through.
    """
    if isinstance(serializer, serializers.ListSerializer):
        serializer = serializer.child
    fields = getattr(serializer, "fields", {}) if isinstance(serializer, serializers.Serializer) else {}

    if isinstance(errors, dict):
        for field_name, value in errors.items():
            field = fields.get(field_name)
            message = first_error(value, field)
            if field_name in (api_settings.NON_FIELD_ERRORS_KEY, "detail"):
                return message
            if not isinstance(value, list):
                return message
            if field is not None and _is_custom_message(field, message):
                return message
            return f"{field_name}: {message}"
    if isinstance(errors, list):
        for entry in errors:
            if entry:
                return first_error(entry, serializer)
    return str(errors) if errors else "Invalid request"


def envelope_error(message: str, *, code: int, **extra) -> Response:
    return Response({"success": False, "error": message, **extra}, status=code)


class RelayView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [RelayThrottle]

    def get_throttles(self):
        if self.request.method == "POST":
            return super().get_throttles()
        return []

    def options(self, request, *args, **kwargs):
        return Response(status=status.HTTP_204_NO_CONTENT)

    def invalid(self, errors, serializer=None) -> Response:
        message = first_error(errors, serializer)
        logger.info("Relay payload rejected", extra={"view": type(self).__name__, "error": message})
        return envelope_error(message, code=status.HTTP_400_BAD_REQUEST)

    def handle_exception(self, exc):
        if isinstance(exc, exceptions.MethodNotAllowed):
            return envelope_error("Method not allowed", code=status.HTTP_405_METHOD_NOT_ALLOWED)

        response = super().handle_exception(exc)
        if isinstance(exc, exceptions.APIException):
            response.data = {"success": False, "error": first_error(response.data)}
        return response

    def finalize_response(self, request, response, *args, **kwargs):
        response = super().finalize_response(request, response, *args, **kwargs)
        for header, value in CORS_HEADERS.items():
            response[header] = value
        return response
