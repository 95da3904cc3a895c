"""Abstract repository for orders supplied by the order API."""

from __future__ import annotations

from abc import ABC, abstractmethod

from bakeops.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found.

        Raises UnknownStatusError if the stored status is unrecognized.
        """

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order, newest first."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist the order's status and last-update time."""
