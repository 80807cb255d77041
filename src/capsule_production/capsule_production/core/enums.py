from __future__ import annotations

from enum import Enum


class ProductionStatus(str, Enum):
    """Derived production state of an order, recomputed on every read."""

    IN_PROGRESS = "inProgress"
    NOT_STARTED = "notStarted"
    COMPLETED = "completed"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"
