# notifications/services/mailer.py

"""
EMAIL RELAY SERVICE

Builds the storefront's emails from Django templates and hands them to the
configured mail backend (SMTP in production, locmem in tests).

- send_order_emails(order): customer confirmation (or invoice) + business copy
- send_contact_email(form): one message to the business inbox(es)

One attempt per call. Any backend failure becomes EmailDeliveryError with the
provider's detail attached. A header the mail framework refuses (line breaks)
becomes InvalidEmailPayload. Retrying is the caller's decision.
"""

from __future__ import annotations

import logging
import smtplib
from email.utils import make_msgid
from typing import Any

from django.conf import settings
from django.core.mail import EmailMultiAlternatives, get_connection
from django.template.loader import render_to_string
from django.utils.html import strip_tags

from notifications.services.exceptions import (
    EmailDeliveryError,
    InvalidEmailPayload,
    InvalidOrderPayload,
)
from notifications.services.order_totals import summarize

logger = logging.getLogger(__name__)


def _shop_settings() -> dict[str, Any]:
    return {
        "name": getattr(settings, "SHOP_NAME", "Buttons Flower Farm"),
        "email": getattr(settings, "SHOP_EMAIL", settings.DEFAULT_FROM_EMAIL),
        "etransfer_email": getattr(
            settings, "SHOP_ETRANSFER_EMAIL", getattr(settings, "SHOP_EMAIL", "")
        ),
    }


def _single_line(value: str, label: str) -> str:
    if "\r" in value or "\n" in value:
        raise InvalidEmailPayload(f"{label} must not contain line breaks")
    return value


def _build_message(
    *, subject: str, template: str, context: dict[str, Any], to: list[str], connection,
    reply_to: list[str] | None = None,
) -> EmailMultiAlternatives:
    html = render_to_string(template, context)
    domain = getattr(settings, "EMAIL_MESSAGE_ID_DOMAIN", None) or None
    message = EmailMultiAlternatives(
        subject=subject,
        body=strip_tags(html).strip(),
        from_email=settings.DEFAULT_FROM_EMAIL,
        to=to,
        reply_to=reply_to,
        headers={"Message-ID": make_msgid(domain=domain)},
        connection=connection,
    )
    message.attach_alternative(html, "text/html")
    return message


def _deliver(messages: list[EmailMultiAlternatives], connection, *, context: dict) -> None:
    try:
        # Opening first surfaces bad credentials before anything is sent.
        connection.open()
        for message in messages:
            message.send(fail_silently=False)
    except ValueError as exc:
        # BadHeaderError: a newline reached a header (subject, reply-to)
        logger.warning("Refusing message with invalid header", extra={**context, "detail": str(exc)})
        raise InvalidEmailPayload("Email headers must not contain line breaks") from exc
    except smtplib.SMTPResponseException as exc:
        detail = exc.smtp_error.decode("utf-8", errors="replace") if isinstance(
            exc.smtp_error, bytes
        ) else str(exc.smtp_error)
        logger.error(
            "Mail provider rejected message",
            extra={**context, "smtp_code": exc.smtp_code, "detail": detail},
        )
        raise EmailDeliveryError("Mail provider rejected the message", detail=detail) from exc
    except (smtplib.SMTPException, OSError) as exc:
        logger.error("Mail delivery failed", extra={**context, "detail": str(exc)})
        raise EmailDeliveryError("Mail delivery failed", detail=str(exc)) from exc
    finally:
        connection.close()


def send_order_emails(order: dict[str, Any]) -> dict[str, str]:
    customer = order.get("customer") or {}
    customer_email = (customer.get("email") or "").strip()
    order_id = _single_line(str(order.get("id") or "").strip(), "Order id")
    if not customer_email:
        raise InvalidOrderPayload("Customer email is required")
    if not order_id:
        raise InvalidOrderPayload("Order id is required")

    shop = _shop_settings()
    is_invoice = bool(order.get("isInvoiceEmail"))
    context = {"order": order, "customer": customer, "totals": summarize(order), "shop": shop}

    connection = get_connection()
    if is_invoice:
        customer_message = _build_message(
            subject=f"Invoice - {order_id}",
            template="notifications/invoice.html",
            context=context,
            to=[customer_email],
            connection=connection,
        )
        business_subject = f"Invoice Sent - {order_id}"
    else:
        customer_message = _build_message(
            subject=f"Order Confirmation - {order_id}",
            template="notifications/customer_confirmation.html",
            context=context,
            to=[customer_email],
            connection=connection,
        )
        business_subject = f"New Order Received - {order_id}"

    business_message = _build_message(
        subject=business_subject,
        template="notifications/business_notification.html",
        context={**context, "is_invoice": is_invoice},
        to=[shop["email"]],
        connection=connection,
    )

    log_context = {"order_id": order_id, "invoice": is_invoice}
    _deliver([customer_message, business_message], connection, context=log_context)

    logger.info("Order emails sent", extra=log_context)
    return {
        "customerEmailId": customer_message.extra_headers["Message-ID"],
        "businessEmailId": business_message.extra_headers["Message-ID"],
    }


def send_contact_email(form: dict[str, Any]) -> dict[str, str]:
    shop = _shop_settings()
    recipients = list(getattr(settings, "CONTACT_RECIPIENTS", None) or [shop["email"]])
    subject = (form.get("subject") or "").strip() or f"New message from {form.get('name', '')}"
    subject = _single_line(subject, "Subject")

    connection = get_connection()
    message = _build_message(
        subject=subject,
        template="notifications/contact.html",
        context={"form": form, "shop": shop},
        to=recipients,
        reply_to=[form["email"]],
        connection=connection,
    )

    _deliver([message], connection, context={"reply_to": form["email"]})

    logger.info("Contact email sent", extra={"recipients": len(recipients)})
    return {"messageId": message.extra_headers["Message-ID"], "recipient": recipients[0]}
