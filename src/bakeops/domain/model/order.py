"""Order, line item and deal records as supplied by the backend.

The core never mutates line items or deals; it only derives values from
them.  Raw backend dictionaries use camelCase or snake_case keys
depending on the endpoint, so the ``from_raw`` constructors accept both.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from bakeops.domain.exceptions import ValidationError
from bakeops.domain.model.order_status import OrderStatus

# Boolean-ish fields the backend uses to tag promotional line items.
DEAL_FLAG_KEYS = ("isDeal", "is_deal", "dealType", "deal_type", "isAddon", "is_addon", "is_deal_item")


def _pick(raw: dict, *keys: str, default: Any = None) -> Any:
    for key in keys:
        value = raw.get(key)
        if value is not None and value != "":
            return value
    return default


@dataclass(frozen=True)
class OrderLineItem:
    """A line item exactly as recorded on the order.

    ``product_id`` and ``price`` are kept raw: they may be missing or
    non-numeric in real data, and classification has to cope with that.
    """

    product_id: Any = None
    price: Any = None
    quantity: int = 1
    name: str | None = None
    flags: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def from_raw(raw: dict) -> OrderLineItem:
        quantity = _pick(raw, "quantity", "qty", default=1)
        try:
            quantity = int(quantity)
        except (TypeError, ValueError):
            quantity = 1
        name = _pick(raw, "productName", "product_name", "name")
        return OrderLineItem(
            product_id=_pick(raw, "productId", "product_id"),
            price=raw.get("price"),
            quantity=quantity,
            name=str(name) if name is not None else None,
            flags={key: raw[key] for key in DEAL_FLAG_KEYS if key in raw},
        )

    def to_raw(self) -> dict:
        raw: dict[str, Any] = {
            "productId": self.product_id,
            "productName": self.name,
            "price": self.price,
            "quantity": self.quantity,
        }
        raw.update(self.flags)
        return raw


@dataclass(frozen=True)
class Deal:
    """One promotional deal from the deals service snapshot."""

    id: int
    product_id: Any
    deal_price: Any
    is_active: bool = True
    title: str = ""

    @staticmethod
    def from_raw(raw: dict) -> Deal:
        return Deal(
            id=raw["id"],
            product_id=_pick(raw, "product_id", "productId"),
            deal_price=_pick(raw, "deal_price", "dealPrice"),
            is_active=bool(raw.get("is_active", raw.get("isActive", True))),
            title=str(_pick(raw, "deal_title", "title", default="")),
        )


@dataclass
class Order:
    """The subset of an order the lifecycle core reads.

    ``created_at`` and ``updated_at`` are the backend's raw timestamp
    values; they are parsed (with fallback) only when a time is derived.
    ``status`` is the only field the core ever changes, and only through
    ``advance_to``.
    """

    id: int
    status: OrderStatus
    created_at: Any
    updated_at: Any
    items: list[OrderLineItem] = field(default_factory=list)
    order_number: str | None = None

    @staticmethod
    def from_raw(raw: dict) -> Order:
        """Build an Order from a backend record.

        Raises UnknownStatusError when the status text is not recognized.
        """
        return Order(
            id=raw["id"],
            status=OrderStatus.parse(raw.get("status")),
            created_at=_pick(raw, "createdAt", "created_at"),
            updated_at=_pick(raw, "updatedAt", "updated_at"),
            items=[OrderLineItem.from_raw(i) for i in raw.get("items") or []],
            order_number=_pick(raw, "order_number", "orderNumber"),
        )

    @property
    def display_number(self) -> str:
        return self.order_number or str(self.id)

    def advance_to(self, target: OrderStatus, updated_at: str) -> bool:
        """Move to *target*, stamping *updated_at*.

        Returns False (and changes nothing) when *target* is the current
        stage.  Raises ValidationError for backward or post-terminal moves.
        """
        if target is self.status:
            return False
        if not self.status.can_transition_to(target):
            raise ValidationError(
                f"Cannot move order #{self.display_number} from "
                f"{self.status.value} to {target.value}"
            )
        self.status = target
        self.updated_at = updated_at
        return True
