# notifications/views/order_email.py

"""
ORDER EMAIL RELAY

POST /api/notifications/order-email/

Sends the customer confirmation (or the invoice, when isInvoiceEmail is set)
and a copy to the business inbox. On success the order's entry in the admin's
manual email list is marked sent, except for test invoices.

Responses:
- 200 {"success": true, "message", "customerEmailId", "businessEmailId"}
- 400 {"success": false, "error"}             invalid payload
- 500 {"success": false, "error", "details"}  provider failure (not retried)
"""

from __future__ import annotations

import logging

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.response import Response

from notifications.serializers import OrderPayloadSerializer
from notifications.services.exceptions import EmailDeliveryError, InvalidEmailPayload
from notifications.services.mailer import send_order_emails
from notifications.views.relay import RelayView, envelope_error
from persistence.services.email_queue import EmailQueueStore
from persistence.stores import shared_store

logger = logging.getLogger(__name__)


class OrderEmailView(RelayView):
    serializer_class = OrderPayloadSerializer

    @extend_schema(request=OrderPayloadSerializer, responses={200: dict, 400: dict, 500: dict})
    def post(self, request):
        serializer = OrderPayloadSerializer(data=request.data)
        if not serializer.is_valid():
            return self.invalid(serializer.errors, serializer)
        order = serializer.validated_data

        try:
            ids = send_order_emails(order)
        except InvalidEmailPayload as exc:
            return envelope_error(str(exc), code=status.HTTP_400_BAD_REQUEST)
        except EmailDeliveryError as exc:
            return envelope_error(
                "Failed to send emails",
                code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                details=exc.detail or str(exc),
            )

        if not order.get("isTestInvoice"):
            EmailQueueStore(shared_store()).mark_sent(order["id"])

        return Response({"success": True, "message": "Emails sent successfully", **ids})
