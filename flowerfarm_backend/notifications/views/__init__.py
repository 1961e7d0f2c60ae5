from .contact_email import ContactEmailView
from .order_email import OrderEmailView
from .pending_emails import (
    PendingEmailCreateView,
    PendingEmailDetailView,
    PendingEmailListView,
    PendingEmailSentView,
)

__all__ = [
    "ContactEmailView",
    "OrderEmailView",
    "PendingEmailCreateView",
    "PendingEmailDetailView",
    "PendingEmailListView",
    "PendingEmailSentView",
]
