"""Domain service: Deal Classifier.

Every line item is either a main item or a deal/add-on item.  The active
deals snapshot is authoritative: an item is a deal when an active deal
targets the same product at (nearly) the same price.  When no such match
is possible the classifier falls back to heuristics: explicit flags, a
deal-ish display name, or a nominal low price.

Classification is pure and never cached on the item alone, because the
same item reclassifies when deals are activated or deactivated.
"""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Any, Iterable, Sequence

from bakeops.domain.model.order import Deal, OrderLineItem
from bakeops.domain.service.data_quality import DataQualityIssue, DataQualityRecorder

# Deal price and line price come from independent currency computations.
DEFAULT_PRICE_TOLERANCE = 0.01
# The "1 rupee deals" campaign; anything at or below this reads as a deal.
DEFAULT_LOW_PRICE_THRESHOLD = 1.0

_DEAL_NAME_MARKERS = ("deal", "add-on", "addon")


def as_number(value: Any) -> float | None:
    """Coerce a backend value to a finite float, or None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


class DealClassifier:

    def __init__(
        self,
        low_price_threshold: float | None = DEFAULT_LOW_PRICE_THRESHOLD,
        price_tolerance: float = DEFAULT_PRICE_TOLERANCE,
        recorder: DataQualityRecorder | None = None,
    ) -> None:
        self._low_price_threshold = low_price_threshold
        self._price_tolerance = price_tolerance
        self._recorder = recorder or DataQualityRecorder()

    def is_deal(self, item: Any, active_deals: Sequence[Deal] = ()) -> bool:
        """Classify one line item.  Total: never raises."""
        if isinstance(item, dict):
            item = OrderLineItem.from_raw(item)
        if not isinstance(item, OrderLineItem):
            return False
        if self.matches_active_deal(item, active_deals):
            return True
        return self.looks_like_deal(item)

    def split(
        self, items: Iterable[Any], active_deals: Sequence[Deal] = ()
    ) -> tuple[list[Any], list[Any]]:
        """Partition *items* into (main_items, deal_items), keeping order."""
        main: list[Any] = []
        deals: list[Any] = []
        for item in items:
            (deals if self.is_deal(item, active_deals) else main).append(item)
        return main, deals

    # --- Authoritative match --------------------------------------------------

    def matches_active_deal(self, item: OrderLineItem, active_deals: Sequence[Deal]) -> bool:
        if not active_deals:
            return False

        product_id = as_number(item.product_id)
        price = as_number(item.price)
        if product_id is None or price is None:
            self._recorder.record(
                DataQualityIssue.DEAL_MATCH_UNAVAILABLE,
                f"item {item.name!r} lacks a numeric product id or price",
            )
            return False

        for deal in active_deals:
            if not deal.is_active:
                continue
            if as_number(deal.product_id) != product_id:
                continue
            deal_price = as_number(deal.deal_price)
            if deal_price is None:
                continue
            if abs(deal_price - price) < self._price_tolerance:
                return True
        return False

    # --- Heuristic fallback ---------------------------------------------------

    def looks_like_deal(self, item: OrderLineItem) -> bool:
        if any(bool(flag) for flag in item.flags.values()):
            return True

        name = (item.name or "").lower()
        if any(marker in name for marker in _DEAL_NAME_MARKERS):
            return True

        if self._low_price_threshold is None:
            return False
        price = as_number(item.price)
        return price is not None and 0 < price <= self._low_price_threshold
