"""Frozen result objects handed from the use-case handlers to the CLI.

Times and prices arrive already formatted for display.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TimelineStageDTO:
    """One step of the order progress bar."""

    status: str
    label: str
    description: str
    timestamp: str  # formatted, or "Not yet"
    is_exact: bool
    is_completed: bool
    is_active: bool

    @property
    def is_approximate(self) -> bool:
        return self.timestamp != "Not yet" and not self.is_exact


@dataclass(frozen=True)
class OrderTimelineDTO:
    id: int
    order_number: str
    status: str
    status_label: str
    stages: list[TimelineStageDTO]
    pending_elapsed: str | None


@dataclass(frozen=True)
class LineItemDTO:
    product_name: str
    quantity: int
    price: str  # formatted, e.g. "₹49.00"


@dataclass(frozen=True)
class ClassifiedItemsDTO:
    """An order's items split for display: main items first, then deals."""

    order_id: int
    main_items: list[LineItemDTO]
    deal_items: list[LineItemDTO]
    deals_available: bool  # False when classification fell back to heuristics only


@dataclass(frozen=True)
class NotificationDTO:
    id: str
    type: str
    module: str
    title: str
    message: str
    time: str
    unread: bool
    link: str | None
