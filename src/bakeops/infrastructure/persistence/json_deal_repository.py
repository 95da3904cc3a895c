"""JSON-file-backed implementation of DealRepository."""

from __future__ import annotations

import json
from pathlib import Path

from bakeops.domain.exceptions import DealSourceUnavailable
from bakeops.domain.model.order import Deal
from bakeops.domain.repository.deal_repository import DealRepository


class JsonDealRepository(DealRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path

    def list_active(self) -> list[Deal]:
        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
            deals = [Deal.from_raw(item) for item in raw]
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as exc:
            raise DealSourceUnavailable(f"Cannot load deals from {self._file_path}: {exc}") from exc
        return [deal for deal in deals if deal.is_active]
