from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import ProductionOrder


class OrderRepository(Protocol):
    def exists(self, order_id: int) -> bool:
        raise NotImplementedError

    def get_by_id(self, order_id: int) -> Optional[ProductionOrder]:
        """Order with its worklogs loaded."""

        raise NotImplementedError

    def list_candidates(
        self,
        *,
        customer_name: Optional[str] = None,
        product_name: Optional[str] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        is_completed: Optional[bool] = None,
    ) -> Sequence[ProductionOrder]:
        """Every order matching the filters, worklogs loaded, in no particular order."""

        raise NotImplementedError
