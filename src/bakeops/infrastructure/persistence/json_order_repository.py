"""JSON-file-backed implementation of OrderRepository.

The file holds order records in the order API's own shape (camelCase
or snake_case keys, raw timestamp strings).  Only ``status`` and
``updatedAt`` are ever written back.
"""

from __future__ import annotations

import json
from pathlib import Path

from bakeops.domain.model.order import Order
from bakeops.domain.repository.order_repository import OrderRepository


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._load_raw():
            if raw["id"] == order_id:
                return Order.from_raw(raw)
        return None

    def list_all(self) -> list[Order]:
        orders = [Order.from_raw(raw) for raw in self._load_raw()]
        return sorted(orders, key=lambda o: o.id, reverse=True)

    def save(self, order: Order) -> None:
        orders = self._load_raw()
        for raw in orders:
            if raw["id"] == order.id:
                raw["status"] = order.status.value
                # keep whichever key style the record already uses
                key = "updated_at" if "updated_at" in raw else "updatedAt"
                raw[key] = order.updated_at
                break
        else:
            orders.append(self._to_raw(order))
        self._persist_raw(orders)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "order_number": order.order_number,
            "status": order.status.value,
            "createdAt": order.created_at,
            "updatedAt": order.updated_at,
            "items": [item.to_raw() for item in order.items],
        }

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, orders: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(orders, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
