"""Live "waiting since" counter for orders still awaiting confirmation.

Renders immediately on ``show()``, then once per tick.  Scheduling stops
the moment the order leaves the first stage or the view calls ``hide()``;
a ticker that is not visible never holds a timer.  A tick that cannot
load the order stops the ticker and keeps the error in ``error``.
"""

from __future__ import annotations

from typing import Callable

from bakeops.application.scheduling import ScheduledTask, Scheduler
from bakeops.domain.exceptions import DomainException
from bakeops.domain.model.order import Order
from bakeops.domain.model.order_status import FIRST_STAGE
from bakeops.domain.service.timeline_estimator import TimelineEstimator

ELAPSED_TICK_SECONDS = 1.0


class PendingElapsedTicker:

    def __init__(
        self,
        load_order: Callable[[], Order],
        estimator: TimelineEstimator,
        scheduler: Scheduler,
        render: Callable[[str | None], None],
        interval: float = ELAPSED_TICK_SECONDS,
    ) -> None:
        self._load_order = load_order
        self._estimator = estimator
        self._scheduler = scheduler
        self._render = render
        self._interval = interval
        self._task: ScheduledTask | None = None
        self.error: DomainException | None = None

    @property
    def active(self) -> bool:
        return self._task is not None and self._task.active

    def show(self) -> None:
        if self.active:
            return
        self.error = None
        if self._render_once():
            self._task = self._scheduler.call_every(self._interval, self._tick)

    def hide(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

    def _tick(self) -> None:
        try:
            still_pending = self._render_once()
        except DomainException as exc:
            self.error = exc
            self.hide()
            raise
        if not still_pending:
            self.hide()

    def _render_once(self) -> bool:
        """Render the current text; True while the order is still pending."""
        order = self._load_order()
        self._render(self._estimator.pending_elapsed(order))
        return order.status is FIRST_STAGE
