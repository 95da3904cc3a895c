"""Application service: Show Order Timeline use case (query)."""

from __future__ import annotations

from datetime import timezone, tzinfo

from bakeops.application.dto import OrderTimelineDTO, TimelineStageDTO
from bakeops.domain.exceptions import EntityNotFoundError
from bakeops.domain.model.order import Order
from bakeops.domain.model.order_status import STAGE_SEQUENCE
from bakeops.domain.repository.order_repository import OrderRepository
from bakeops.domain.service.time_format import format_stage_time
from bakeops.domain.service.timeline_estimator import TimelineEstimator


class ShowOrderTimelineHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        estimator: TimelineEstimator,
        display_timezone: tzinfo = timezone.utc,
    ) -> None:
        self._order_repo = order_repo
        self._estimator = estimator
        self._display_timezone = display_timezone

    def handle(self, order_id: int) -> OrderTimelineDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        return self._to_dto(order)

    def _to_dto(self, order: Order) -> OrderTimelineDTO:
        current = order.status.ordinal
        stages = []
        for index, (stage, estimate) in enumerate(
            zip(STAGE_SEQUENCE, self._estimator.timeline(order))
        ):
            stages.append(
                TimelineStageDTO(
                    status=stage.value,
                    label=stage.label,
                    description=stage.description,
                    timestamp=format_stage_time(estimate.date, self._display_timezone),
                    is_exact=estimate.is_exact,
                    is_completed=current is not None and current >= index,
                    is_active=stage is order.status,
                )
            )
        return OrderTimelineDTO(
            id=order.id,
            order_number=order.display_number,
            status=order.status.value,
            status_label=order.status.label,
            stages=stages,
            pending_elapsed=self._estimator.pending_elapsed(order),
        )
