"""Notification records kept in the ledger.

A notification is created unread, may be flipped to read, and is
otherwise immutable until it is deleted.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from enum import Enum
from typing import Any

from bakeops.domain.exceptions import StorageError


class NotificationType(Enum):
    ORDER_NEW = "order_new"
    ORDER_STATUS_CHANGED = "order_status_changed"
    ORDER_CANCELLED = "order_cancelled"
    PAYMENT_RECEIVED = "payment_received"
    PAYMENT_FAILED = "payment_failed"
    DELIVERY_ASSIGNED = "delivery_assigned"
    DELIVERY_STATUS_CHANGED = "delivery_status_changed"
    DELIVERY_COMPLETED = "delivery_completed"
    LOW_STOCK = "low_stock"
    PRODUCT_ADDED = "product_added"
    PRODUCT_UPDATED = "product_updated"
    CUSTOMER_REGISTERED = "customer_registered"
    PROMO_CODE_CREATED = "promo_code_created"
    DEAL_CREATED = "deal_created"
    SYSTEM_ALERT = "system_alert"


class NotificationModule(Enum):
    ORDERS = "orders"
    DELIVERY = "delivery"
    PAYMENTS = "payments"
    PRODUCTS = "products"
    CUSTOMERS = "customers"
    PROMO_CODES = "promo_codes"
    DEALS = "deals"
    SYSTEM = "system"
    ALL = "all"  # filter wildcard, never stored on a record


@dataclass(frozen=True)
class NewNotification:
    """Input to ``NotificationLedger.add``: what happened, not when."""

    type: NotificationType
    title: str
    message: str
    module: NotificationModule
    data: dict[str, Any] = field(default_factory=dict)
    link: str | None = None


@dataclass(frozen=True)
class Notification:
    id: str
    type: NotificationType
    title: str
    message: str
    module: NotificationModule
    data: dict[str, Any]
    time: str
    timestamp: int  # milliseconds since the epoch
    unread: bool = True
    link: str | None = None

    def mark_read(self) -> Notification:
        if not self.unread:
            return self
        return replace(self, unread=False)

    # --- Serialization --------------------------------------------------------

    def to_raw(self) -> dict:
        raw = asdict(self)
        raw["type"] = self.type.value
        raw["module"] = self.module.value
        if self.link is None:
            del raw["link"]
        return raw

    @staticmethod
    def from_raw(raw: dict) -> Notification:
        """Rebuild a stored record.

        Raises StorageError if the record is malformed.
        """
        try:
            return Notification(
                id=str(raw["id"]),
                type=NotificationType(raw["type"]),
                title=str(raw["title"]),
                message=str(raw["message"]),
                module=NotificationModule(raw["module"]),
                data=dict(raw.get("data") or {}),
                time=str(raw.get("time", "")),
                timestamp=int(raw["timestamp"]),
                unread=bool(raw.get("unread", True)),
                link=raw.get("link"),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise StorageError(f"Malformed notification record: {raw!r}") from exc


@dataclass(frozen=True)
class NotificationFilters:
    """Query for ``NotificationLedger.list``.

    Filters apply after sorting, in field order; ``limit`` truncates the
    final filtered set.
    """

    module: NotificationModule | None = None
    type: NotificationType | None = None
    unread_only: bool = False
    limit: int | None = None

    def matches(self, notification: Notification) -> bool:
        if (
            self.module is not None
            and self.module is not NotificationModule.ALL
            and notification.module is not self.module
        ):
            return False
        if self.type is not None and notification.type is not self.type:
            return False
        if self.unread_only and not notification.unread:
            return False
        return True
