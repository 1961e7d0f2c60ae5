# notifications/serializers.py

"""
RELAY PAYLOADS

Field names follow the storefront's JSON (camelCase) so the client can post
its order object as-is. Unknown fields are ignored.
"""

from __future__ import annotations

from rest_framework import serializers


def single_line(value: str) -> str:
    """Values that end up in mail headers (subject) must stay on one line."""
    if "\r" in value or "\n" in value:
        raise serializers.ValidationError("Must not contain line breaks.")
    return value


class OrderItemSerializer(serializers.Serializer):
    name = serializers.CharField()
    quantity = serializers.IntegerField(min_value=0)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, coerce_to_string=False)
    isFreebie = serializers.BooleanField(required=False, default=False)
    inventoryStatus = serializers.CharField(required=False, allow_blank=True, default="")


class OrderCustomerSerializer(serializers.Serializer):
    firstName = serializers.CharField(required=False, allow_blank=True, default="")
    lastName = serializers.CharField(required=False, allow_blank=True, default="")
    email = serializers.EmailField(
        error_messages={"required": "Customer email is required"}
    )
    phone = serializers.CharField(required=False, allow_blank=True, default="")


class DiscountSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=10, decimal_places=2, coerce_to_string=False)
    reason = serializers.CharField(required=False, allow_blank=True, default="")


class OrderPayloadSerializer(serializers.Serializer):
    id = serializers.CharField(validators=[single_line])
    date = serializers.CharField(required=False, allow_blank=True, default="")
    total = serializers.DecimalField(
        max_digits=10, decimal_places=2, required=False, allow_null=True, coerce_to_string=False
    )
    subtotal = serializers.DecimalField(
        max_digits=10, decimal_places=2, required=False, allow_null=True, coerce_to_string=False
    )
    gst = serializers.DecimalField(
        max_digits=10, decimal_places=2, required=False, allow_null=True, coerce_to_string=False
    )
    pst = serializers.DecimalField(
        max_digits=10, decimal_places=2, required=False, allow_null=True, coerce_to_string=False
    )
    items = OrderItemSerializer(many=True)
    customer = OrderCustomerSerializer()
    discount = DiscountSerializer(required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, default="")
    isInvoiceEmail = serializers.BooleanField(required=False, default=False)
    isTestInvoice = serializers.BooleanField(required=False, default=False)


class ContactPayloadSerializer(serializers.Serializer):
    name = serializers.CharField(validators=[single_line])
    email = serializers.EmailField()
    phone = serializers.CharField(required=False, allow_blank=True, default="")
    subject = serializers.CharField(
        required=False, allow_blank=True, default="", validators=[single_line]
    )
    message = serializers.CharField()


class PendingEmailSerializer(serializers.Serializer):
    orderId = serializers.CharField()
    customerName = serializers.CharField(required=False, allow_blank=True, default="")
    customerEmail = serializers.EmailField(required=False, allow_blank=True, default="")
    date = serializers.CharField(required=False, allow_blank=True)
