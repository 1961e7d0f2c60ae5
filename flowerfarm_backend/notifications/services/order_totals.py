# notifications/services/order_totals.py

"""
ORDER TOTALS FOR EMAIL TEMPLATES

Money is Decimal, rounded half-up to cents.

Rules:
- freebies are listed but never counted in the subtotal
- final total = max(0, subtotal - discount)
- items are "pre-order" when their inventoryStatus is Pre-Order or Coming Soon,
  otherwise they are ready for pickup (missing status means In Stock)
- a mixed order invoices the ready-for-pickup part now, with GST 5% and
  PST 7%, and the pre-order part on delivery
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

TWOPLACES = Decimal("0.01")
GST_RATE = Decimal("0.05")
PST_RATE = Decimal("0.07")

IN_STOCK = "In Stock"
PREORDER_STATUSES = {"pre-order", "coming soon"}


def money(value) -> Decimal:
    if value is None or value == "":
        return Decimal("0.00")
    try:
        return Decimal(str(value)).quantize(TWOPLACES, rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError, TypeError):
        return Decimal("0.00")


def quantity(value) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def inventory_status(item: dict[str, Any]) -> str:
    return (item.get("inventoryStatus") or IN_STOCK).strip() or IN_STOCK


def is_preorder(item: dict[str, Any]) -> bool:
    return inventory_status(item).lower() in PREORDER_STATUSES


def line_total(item: dict[str, Any]) -> Decimal:
    if item.get("isFreebie"):
        return Decimal("0.00")
    return money(money(item.get("price")) * quantity(item.get("quantity")))


def items_subtotal(items: list[dict[str, Any]]) -> Decimal:
    return money(sum((line_total(i) for i in items), Decimal("0.00")))


def discount_amount(order: dict[str, Any]) -> Decimal:
    discount = order.get("discount") or {}
    if not isinstance(discount, dict):
        return Decimal("0.00")
    return money(discount.get("amount"))


def order_subtotal(order: dict[str, Any]) -> Decimal:
    items = order.get("items") or []
    if items:
        return items_subtotal(items)
    # No items: rebuild from total + discount
    return money(money(order.get("total")) + discount_amount(order))


def final_total(order: dict[str, Any]) -> Decimal:
    return max(Decimal("0.00"), money(order_subtotal(order) - discount_amount(order)))


@dataclass(frozen=True)
class InvoiceSplit:
    ready: list
    preorder: list

    @property
    def mixed(self) -> bool:
        return bool(self.ready) and bool(self.preorder)

    @property
    def ready_subtotal(self) -> Decimal:
        return items_subtotal(self.ready)

    @property
    def ready_gst(self) -> Decimal:
        return money(self.ready_subtotal * GST_RATE)

    @property
    def ready_pst(self) -> Decimal:
        return money(self.ready_subtotal * PST_RATE)

    @property
    def ready_total(self) -> Decimal:
        return money(self.ready_subtotal + self.ready_gst + self.ready_pst)

    @property
    def preorder_subtotal(self) -> Decimal:
        return items_subtotal(self.preorder)


def split_items(items: list[dict[str, Any]]) -> InvoiceSplit:
    ready = [i for i in items if not is_preorder(i)]
    preorder = [i for i in items if is_preorder(i)]
    return InvoiceSplit(ready=ready, preorder=preorder)


def summarize(order: dict[str, Any]) -> dict[str, Any]:
    """Everything the templates need, pre-computed."""
    items = order.get("items") or []
    rows = [
        {
            "name": item.get("name", ""),
            "quantity": quantity(item.get("quantity")),
            "price": money(item.get("price")),
            "line_total": line_total(item),
            "status": inventory_status(item),
            "is_freebie": bool(item.get("isFreebie")),
            "is_preorder": is_preorder(item),
        }
        for item in items
    ]
    split = split_items(items)
    discount = order.get("discount") if isinstance(order.get("discount"), dict) else {}

    return {
        "rows": rows,
        "ready_rows": [r for r in rows if not r["is_preorder"]],
        "preorder_rows": [r for r in rows if r["is_preorder"]],
        "mixed": split.mixed,
        "subtotal": money(order.get("subtotal")) if order.get("subtotal") else order_subtotal(order),
        "gst": money(order.get("gst")),
        "pst": money(order.get("pst")),
        "discount": discount_amount(order),
        "discount_reason": (discount or {}).get("reason") or "",
        "total": money(order.get("total")) if order.get("total") else final_total(order),
        "ready_subtotal": split.ready_subtotal,
        "ready_gst": split.ready_gst,
        "ready_pst": split.ready_pst,
        "ready_total": split.ready_total,
        "preorder_subtotal": split.preorder_subtotal,
    }
