"""Example: rank a few orders with the engine directly (no Flask, no database).

Controllers are a thin layer; the accounting and ranking live in services.
"""

from datetime import date, datetime, time

from src.capsule_production.capsule_production.core.enums import SortOrder
from src.capsule_production.capsule_production.orders.model import ProductionOrder
from src.capsule_production.capsule_production.orders.prioritizer import OrderPrioritizer
from src.capsule_production.capsule_production.worklogs.model import ShiftEntry


def main():
    shift = ShiftEntry(
        worklog_id=1,
        order_id=1,
        work_date=date(2025, 1, 6),
        start_time=time(9, 0),
        end_time=time(17, 0),
        headcount=3,
    )
    orders = [
        ProductionOrder(2, "Beta Health", "Vitamin C", 20000, created_at=datetime(2025, 1, 3, 10, 0)),
        ProductionOrder(3, "Gamma Labs", "Fish Oil", 5000, created_at=datetime(2024, 12, 1), completion_date=date(2025, 1, 1)),
        ProductionOrder(1, "Alpha Co", "Probiotic", 10000, created_at=datetime(2025, 1, 2, 9, 0), worklogs=(shift,)),
    ]

    for r in OrderPrioritizer().rank(orders, SortOrder.DESC):
        print(f"{r.order.order_id:>3}  {r.status.value:<11} {r.total_work_units} units")


if __name__ == "__main__":
    main()
