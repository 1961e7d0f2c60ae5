# notifications/services/exceptions.py

"""
EMAIL RELAY ERRORS

Centralized domain errors for the relay handlers.
"""


class EmailRelayError(Exception):
    """Base exception for all relay failures."""


class InvalidEmailPayload(EmailRelayError):
    """Raised when a payload cannot be turned into a valid email (e.g. header injection)."""


class InvalidOrderPayload(InvalidEmailPayload):
    """Raised when an order payload cannot be rendered into an email."""


class EmailDeliveryError(EmailRelayError):
    """Raised when the mail provider rejects or never accepts a message."""

    def __init__(self, message: str, *, detail: str = ""):
        super().__init__(message)
        self.detail = detail
