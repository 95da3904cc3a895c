"""Domain service: Timeline Estimator.

The backend records only two instants per order: when it was created and
when it last changed.  Every stage of the forward sequence still gets a
display time:

- the current stage shows ``updated_at`` and the first stage shows
  ``created_at``, both exact unless the value could not be parsed and
  "now" stands in for it,
- future stages show nothing,
- past stages in between are linearly interpolated across the
  created/updated window, proportional to ``(index + 1) / (current + 1)``,
  and flagged as estimates.

Interpolated values say "somewhere in this window", not "at this time".
"""

from __future__ import annotations

from datetime import datetime, timedelta

from bakeops.domain.model.order import Order
from bakeops.domain.model.order_status import FIRST_STAGE, STAGE_SEQUENCE, stage_at
from bakeops.domain.model.value_objects import StageTimestamp
from bakeops.domain.service.data_quality import DataQualityIssue
from bakeops.domain.service.time_format import format_elapsed
from bakeops.domain.service.timestamps import TimestampParser


class TimelineEstimator:

    def __init__(self, parser: TimestampParser | None = None) -> None:
        self._parser = parser or TimestampParser()

    def estimate_stage(self, order: Order, stage_index: int) -> StageTimestamp:
        """Display timestamp for the stage at *stage_index*.

        Raises ValidationError if *stage_index* is outside the sequence.
        A cancelled order keeps only its creation time.
        """
        stage_at(stage_index)
        current = order.status.ordinal

        if current is not None and stage_index == current:
            return self._recorded(order.updated_at)

        if stage_index == FIRST_STAGE.ordinal:
            return self._recorded(order.created_at)

        if current is None or stage_index > current:
            return StageTimestamp.absent()

        created = self._parser.parse(order.created_at).value
        updated = self._parser.parse(order.updated_at).value
        window = updated - created
        if window < timedelta(0):
            self._parser.recorder.record(
                DataQualityIssue.NEGATIVE_TIME_WINDOW,
                f"order #{order.display_number} updated before it was created",
            )
            window = timedelta(0)

        ratio = (stage_index + 1) / max(current + 1, 1)
        return StageTimestamp.estimated(created + window * ratio)

    def _recorded(self, raw: object) -> StageTimestamp:
        parsed = self._parser.parse(raw)
        if parsed.is_fallback:
            return StageTimestamp.estimated(parsed.value)
        return StageTimestamp.exact(parsed.value)

    def timeline(self, order: Order) -> list[StageTimestamp]:
        """``estimate_stage`` for every stage, in sequence order."""
        return [self.estimate_stage(order, i) for i in range(len(STAGE_SEQUENCE))]

    def pending_elapsed(self, order: Order, now: datetime | None = None) -> str | None:
        """Time the order has been waiting for confirmation, e.g. '2m 5s'.

        None once the order has left the first stage, or when its creation
        time cannot be parsed.  Clock skew floors to '0s'.
        """
        if order.status is not FIRST_STAGE:
            return None

        created = self._parser.parse(order.created_at)
        if created.is_fallback:
            return None

        elapsed = (now or self._parser.now()) - created.value
        if elapsed < timedelta(0):
            self._parser.recorder.record(
                DataQualityIssue.NEGATIVE_ELAPSED,
                f"order #{order.display_number} was created in the future",
            )
        return format_elapsed(elapsed)
