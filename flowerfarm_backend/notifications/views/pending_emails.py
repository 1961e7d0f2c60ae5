# notifications/views/pending_emails.py

"""
PENDING ORDER EMAILS

Public (storefront checkout fallback):
- POST /api/notifications/pending-emails/          queue a confirmation that failed

Admin (behind the session gate):
- GET    /api/admin/pending-emails/                 manual emails still pending
- DELETE /api/admin/pending-emails/<order_id>/      drop every record for the order
- POST   /api/admin/pending-emails/<order_id>/sent/ mark the order's record sent

Records live in the shared store so the admin sees what any visitor queued.
"""

from __future__ import annotations

import logging

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from notifications.serializers import PendingEmailSerializer
from notifications.views.relay import RelayThrottle
from persistence.services.email_queue import EmailQueueStore
from persistence.stores import shared_store

logger = logging.getLogger(__name__)


def _queue() -> EmailQueueStore:
    return EmailQueueStore(shared_store())


class PendingEmailCreateView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [RelayThrottle]

    @extend_schema(request=PendingEmailSerializer, responses={201: dict, 400: dict, 507: dict})
    def post(self, request):
        serializer = PendingEmailSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        if not _queue().enqueue(dict(serializer.validated_data)):
            return Response(
                {"detail": "Email could not be queued."},
                status=status.HTTP_507_INSUFFICIENT_STORAGE,
            )

        logger.info(
            "Order email queued for manual send",
            extra={"order_id": serializer.validated_data["orderId"]},
        )
        return Response({"queued": True}, status=status.HTTP_201_CREATED)


# ---------------------------
# ADMIN
# Access is decided by SessionGateMiddleware (login or dev-mode flag),
# so DRF itself lets every request through.
# ---------------------------


class PendingEmailListView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(responses={200: dict})
    def get(self, request):
        pending = _queue().pending()
        return Response({"count": len(pending), "results": pending})


class PendingEmailDetailView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(responses={204: None, 500: dict})
    def delete(self, request, order_id: str):
        if not _queue().remove(order_id):
            return Response(
                {"detail": "Queued email could not be removed."},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        return Response(status=status.HTTP_204_NO_CONTENT)


class PendingEmailSentView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(request=None, responses={200: dict, 404: dict})
    def post(self, request, order_id: str):
        if not _queue().mark_sent(order_id):
            return Response(
                {"detail": "No queued email for this order."},
                status=status.HTTP_404_NOT_FOUND,
            )
        return Response({"orderId": order_id, "status": "sent"})
