"""Application service: Classify Order Items use case (query).

Fetches the active-deals snapshot once per call.  If the deals service is
down the order is still shown, classified by heuristics alone.
"""

from __future__ import annotations

import logging

from bakeops.application.dto import ClassifiedItemsDTO, LineItemDTO
from bakeops.domain.exceptions import DealSourceUnavailable, EntityNotFoundError
from bakeops.domain.model.order import Deal, OrderLineItem
from bakeops.domain.repository.deal_repository import DealRepository
from bakeops.domain.repository.order_repository import OrderRepository
from bakeops.domain.service.deal_classifier import DealClassifier, as_number

logger = logging.getLogger(__name__)


class ClassifyOrderItemsHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        deal_repo: DealRepository,
        classifier: DealClassifier,
    ) -> None:
        self._order_repo = order_repo
        self._deal_repo = deal_repo
        self._classifier = classifier

    def handle(self, order_id: int) -> ClassifiedItemsDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")

        deals, available = self._active_deals()
        main, promotional = self._classifier.split(order.items, deals)
        return ClassifiedItemsDTO(
            order_id=order.id,
            main_items=[self._to_dto(i) for i in main],
            deal_items=[self._to_dto(i) for i in promotional],
            deals_available=available,
        )

    def _active_deals(self) -> tuple[list[Deal], bool]:
        try:
            return self._deal_repo.list_active(), True
        except DealSourceUnavailable as exc:
            logger.warning("deals unavailable, classifying by heuristics only: %s", exc)
            return [], False

    @staticmethod
    def _to_dto(item: OrderLineItem) -> LineItemDTO:
        price = as_number(item.price)
        return LineItemDTO(
            product_name=item.name or "Unknown",
            quantity=item.quantity,
            price=f"₹{price:.2f}" if price is not None else "-",
        )
