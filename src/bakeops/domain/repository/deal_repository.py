"""Abstract source of the active-deals snapshot."""

from __future__ import annotations

from abc import ABC, abstractmethod

from bakeops.domain.model.order import Deal


class DealRepository(ABC):

    @abstractmethod
    def list_active(self) -> list[Deal]:
        """Return the currently active deals.

        Raises DealSourceUnavailable when the snapshot cannot be fetched.
        """
