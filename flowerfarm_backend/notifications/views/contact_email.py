# notifications/views/contact_email.py

"""
CONTACT FORM RELAY

POST /api/notifications/contact-email/  {name, email, phone?, subject?, message}

One message to the business inbox(es), reply-to set to the sender.
"""

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.response import Response

from notifications.serializers import ContactPayloadSerializer
from notifications.services.exceptions import EmailDeliveryError, InvalidEmailPayload
from notifications.services.mailer import send_contact_email
from notifications.views.relay import RelayView, envelope_error


class ContactEmailView(RelayView):
    serializer_class = ContactPayloadSerializer

    @extend_schema(request=ContactPayloadSerializer, responses={200: dict, 400: dict, 500: dict})
    def post(self, request):
        serializer = ContactPayloadSerializer(data=request.data)
        if not serializer.is_valid():
            return self.invalid(serializer.errors, serializer)

        try:
            result = send_contact_email(serializer.validated_data)
        except InvalidEmailPayload as exc:
            return envelope_error(str(exc), code=status.HTTP_400_BAD_REQUEST)
        except EmailDeliveryError as exc:
            return envelope_error(
                "Failed to send email",
                code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                details=exc.detail or str(exc),
            )

        return Response({"success": True, "message": "Email sent successfully", **result})
