from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional

from .core.constants import LUNCH_END, LUNCH_START, RANKING_SOFT_LIMIT
from .database.connection import DBConfig, DatabaseConnection
from .orders.mysql_order_repository import MySQLOrderRepository
from .orders.prioritizer import OrderPrioritizer
from .orders.repository import OrderRepository
from .orders.service import OrderService
from .worklogs.aggregator import WorklogAggregator
from .worklogs.calculator.standard_calculator import StandardWorkUnitCalculator
from .worklogs.mysql_worklog_repository import MySQLWorklogRepository
from .worklogs.repository import WorklogRepository
from .worklogs.service import WorklogService


@dataclass(frozen=True)
class Container:
    orders_repo: OrderRepository
    worklogs_repo: WorklogRepository

    order_service: OrderService
    worklog_service: WorklogService

    conn: Optional[DatabaseConnection] = None


def build_services(
    *,
    orders_repo: OrderRepository,
    worklogs_repo: WorklogRepository,
    lunch_start: time = LUNCH_START,
    lunch_end: time = LUNCH_END,
    ranking_soft_limit: int = RANKING_SOFT_LIMIT,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services over the given repositories; one calculator shared by all callers."""
    calculator = StandardWorkUnitCalculator(lunch_start=lunch_start, lunch_end=lunch_end)
    prioritizer = OrderPrioritizer(WorklogAggregator(calculator))

    return Container(
        orders_repo=orders_repo,
        worklogs_repo=worklogs_repo,
        order_service=OrderService(
            orders_repo,
            worklogs_repo,
            prioritizer=prioritizer,
            ranking_soft_limit=ranking_soft_limit,
        ),
        worklog_service=WorklogService(worklogs_repo, orders_repo, calculator=calculator),
        conn=conn,
    )


def build_container(
    *,
    db_config: dict,
    lunch_start: time = LUNCH_START,
    lunch_end: time = LUNCH_END,
    ranking_soft_limit: int = RANKING_SOFT_LIMIT,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))
    return build_services(
        orders_repo=MySQLOrderRepository(conn),
        worklogs_repo=MySQLWorklogRepository(conn),
        lunch_start=lunch_start,
        lunch_end=lunch_end,
        ranking_soft_limit=ranking_soft_limit,
        conn=conn,
    )
