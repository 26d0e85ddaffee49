# task_manager/services/task_query.py
"""
Paginated, filtered and sorted listing of one user's tasks.

The frontend relies on these exact semantics:

- ``page`` is 1-indexed and ``offset = (page - 1) * page_size``
- ``total_pages = ceil(total / page_size)``; a page past the end is empty
- ``page_size`` above ``MAX_PAGE_SIZE`` is clamped, not rejected
- ``status`` of ``None``/``"all"`` means no status predicate
- ``due_date`` sorts ascending, ``priority`` descending (High first),
  ``title`` ascending; any other key falls back to ``id`` ascending

Every ordering ends on ``id`` so that rows with equal sort values keep a
stable position across pages.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Union

from sqlalchemy.orm import Session

from task_manager.models.task import Task, TaskStatus

DEFAULT_SORT = "due_date"
ALL_STATUSES = "all"
MAX_PAGE_SIZE = 100

SORT_ORDERS = {
    "due_date": (Task.due_date.asc(), Task.id.asc()),
    "priority": (Task.priority.desc(), Task.id.asc()),
    "title": (Task.title.asc(), Task.id.asc()),
}
FALLBACK_ORDER = (Task.id.asc(),)


@dataclass
class TaskPage:
    items: List[Task]
    total: int
    page: int
    page_size: int
    total_pages: int


def parse_status_filter(value: Optional[Union[str, int]]) -> Optional[TaskStatus]:
    """Turn the ``status`` query parameter into a TaskStatus (or None for all)

    Raises ValueError for anything that is not ``all`` or a known status value.
    """
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if value == "" or value.lower() == ALL_STATUSES:
            return None
        if not value.isdigit():
            raise ValueError(f"Unknown status filter: {value!r}")
        value = int(value)
    return TaskStatus(value)


class TaskQueryEngine:
    def __init__(self, db: Session):
        self.db = db

    def list(
        self,
        user_id: int,
        page: int = 1,
        page_size: int = 10,
        status_filter: Optional[TaskStatus] = None,
        sort_by: str = DEFAULT_SORT,
    ) -> TaskPage:
        if page < 1 or page_size < 1:
            raise ValueError("page and page_size must be positive")
        page_size = min(page_size, MAX_PAGE_SIZE)

        # Ownership is part of the predicate, never filtered afterwards
        query = self.db.query(Task).filter(Task.user_id == user_id)
        if status_filter is not None:
            query = query.filter(Task.status == int(status_filter))

        total = query.count()
        offset = (page - 1) * page_size
        if offset >= total:
            # Past the last page; the offset may not even fit a SQL integer
            items = []
        else:
            items = (
                query.order_by(*SORT_ORDERS.get(sort_by, FALLBACK_ORDER))
                .offset(offset)
                .limit(page_size)
                .all()
            )

        return TaskPage(
            items=items,
            total=total,
            page=page,
            page_size=page_size,
            total_pages=math.ceil(total / page_size),
        )
