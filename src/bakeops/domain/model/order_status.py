"""Order status state machine.

The forward sequence is ``pending -> confirmed -> preparing -> ready ->
delivered``.  ``cancelled`` sits outside the sequence: it has no ordinal,
can be reached from any non-terminal stage, and ends progress tracking.
"""

from __future__ import annotations

from enum import Enum

from bakeops.domain.exceptions import UnknownStatusError, ValidationError


class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    READY = "ready"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    # --- Parsing --------------------------------------------------------------

    @staticmethod
    def parse(raw: object) -> OrderStatus:
        """Resolve backend status text, failing loudly on anything unknown.

        Matching ignores case and surrounding whitespace.  There is no
        default stage: an unrecognized value raises ``UnknownStatusError``.
        """
        if isinstance(raw, OrderStatus):
            return raw
        if not isinstance(raw, str):
            raise UnknownStatusError(raw)
        try:
            return OrderStatus(raw.strip().lower())
        except ValueError:
            raise UnknownStatusError(raw) from None

    # --- Metadata -------------------------------------------------------------

    @property
    def ordinal(self) -> int | None:
        """Zero-based position in the forward sequence, None for cancelled."""
        if self is OrderStatus.CANCELLED:
            return None
        return STAGE_SEQUENCE.index(self)

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @property
    def is_sequence_terminal(self) -> bool:
        """True only for the last stage of the forward sequence."""
        return self is OrderStatus.DELIVERED

    @property
    def is_terminal(self) -> bool:
        """True when no further transition is possible."""
        return self in (OrderStatus.DELIVERED, OrderStatus.CANCELLED)

    # --- Transitions ----------------------------------------------------------

    def can_transition_to(self, target: OrderStatus) -> bool:
        """Is *target* a legal forward move from this stage?

        Re-invoking the current stage is always allowed (idempotent no-op).
        """
        if target is self:
            return True
        if target is OrderStatus.CANCELLED:
            return not self.is_terminal
        if self is OrderStatus.CANCELLED:
            return False
        return target.ordinal >= self.ordinal  # type: ignore[operator]


STAGE_SEQUENCE: tuple[OrderStatus, ...] = (
    OrderStatus.PENDING,
    OrderStatus.CONFIRMED,
    OrderStatus.PREPARING,
    OrderStatus.READY,
    OrderStatus.DELIVERED,
)

FIRST_STAGE = STAGE_SEQUENCE[0]

_LABELS = {
    OrderStatus.PENDING: "Pending",
    OrderStatus.CONFIRMED: "Confirmed",
    OrderStatus.PREPARING: "Preparing",
    OrderStatus.READY: "Ready",
    OrderStatus.DELIVERED: "Delivered",
    OrderStatus.CANCELLED: "Cancelled",
}

_DESCRIPTIONS = {
    OrderStatus.PENDING: "Order placed by customer - awaiting manual confirmation",
    OrderStatus.CONFIRMED: "Order verified and confirmed - ready for production",
    OrderStatus.PREPARING: "Production in progress - cake is being made",
    OrderStatus.READY: "Order is ready for pickup/delivery",
    OrderStatus.DELIVERED: "Order has been delivered to customer",
    OrderStatus.CANCELLED: "Order was cancelled",
}


def stage_at(index: int) -> OrderStatus:
    """Return the sequence stage at *index*.

    Raises ValidationError for indices outside the forward sequence.
    """
    if not 0 <= index < len(STAGE_SEQUENCE):
        raise ValidationError(
            f"Stage index {index} is outside 0..{len(STAGE_SEQUENCE) - 1}"
        )
    return STAGE_SEQUENCE[index]
