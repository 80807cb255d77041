from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import ShiftEntry, ShiftEntryInput, WorklogQuery, WorklogRow, WorkUnitResult


class WorklogRepository(Protocol):
    def get_by_id(self, worklog_id: int) -> Optional[ShiftEntry]:
        raise NotImplementedError

    def create(self, *, order_id: int, entry: ShiftEntryInput, result: WorkUnitResult) -> int:
        raise NotImplementedError

    def update(self, *, worklog_id: int, entry: ShiftEntryInput, result: WorkUnitResult) -> bool:
        raise NotImplementedError

    def delete(self, *, worklog_id: int) -> bool:
        raise NotImplementedError

    def search(
        self,
        query: WorklogQuery,
        *,
        offset: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> Sequence[WorklogRow]:
        """Filtered rows ordered by work date (then start time) in query.sort_order."""

        raise NotImplementedError

    def count(self, query: WorklogQuery) -> int:
        raise NotImplementedError
