"""Owner-scoped task listing and per-status statistics.

Client parameters arrive as raw strings. They are validated here so an
unknown status, priority, sort field or order is reported as a 400 rather
than silently ignored.
"""
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from sqlalchemy import case, func, or_

from ..errors import ValidationError
from ..models import Task, TaskPriority, TaskStatus, User
from ..stores import TaskStore

logger = logging.getLogger(__name__)

SORT_ORDERS = ("asc", "desc")
DEFAULT_SORT = "createdAt"
DEFAULT_ORDER = "desc"

_PRIORITY_RANK = case(
    (Task.priority == TaskPriority.LOW, 0),
    (Task.priority == TaskPriority.MEDIUM, 1),
    (Task.priority == TaskPriority.HIGH, 2),
    else_=3,
)

_STATUS_RANK = case(
    (Task.status == TaskStatus.PENDING, 0),
    (Task.status == TaskStatus.IN_PROGRESS, 1),
    (Task.status == TaskStatus.COMPLETED, 2),
    else_=3,
)

SORT_FIELDS = {
    "createdAt": Task.created_at,
    "updatedAt": Task.updated_at,
    "dueDate": Task.due_date,
    "priority": _PRIORITY_RANK,
    "status": _STATUS_RANK,
    "title": func.lower(Task.title),
}


@dataclass(frozen=True)
class TaskQueryParams:
    search: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    sort_by: str = DEFAULT_SORT
    order: str = DEFAULT_ORDER


def _blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _parse_enum(enum_cls, value: Optional[str], label: str):
    if _blank(value):
        return None
    try:
        return enum_cls(value.strip())
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(f"Invalid {label} '{value}'. Allowed: {allowed}") from None


def parse_query_params(
    search: Optional[str] = None,
    status: Optional[str] = None,
    priority: Optional[str] = None,
    sort_by: Optional[str] = None,
    order: Optional[str] = None,
) -> TaskQueryParams:
    """Build TaskQueryParams from raw query-string values. Blank means absent."""
    sort_by = DEFAULT_SORT if _blank(sort_by) else sort_by.strip()
    if sort_by not in SORT_FIELDS:
        raise ValidationError(
            f"Invalid sortBy '{sort_by}'. Allowed: {', '.join(SORT_FIELDS)}"
        )

    order = DEFAULT_ORDER if _blank(order) else order.strip().lower()
    if order not in SORT_ORDERS:
        raise ValidationError(f"Invalid order '{order}'. Allowed: asc, desc")

    return TaskQueryParams(
        search=None if _blank(search) else search.strip(),
        status=_parse_enum(TaskStatus, status, "status"),
        priority=_parse_enum(TaskPriority, priority, "priority"),
        sort_by=sort_by,
        order=order,
    )


def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class TaskQueryEngine:
    def __init__(self, tasks: TaskStore) -> None:
        self.tasks = tasks

    def list_tasks(self, user: User, params: Optional[TaskQueryParams] = None) -> List[Task]:
        """Return the caller's tasks matching ``params`` in a deterministic order."""
        params = params or TaskQueryParams()

        # Owner scope comes first and is never taken from params.
        query = self.tasks.query_for_owner(user.id)

        if params.status is not None:
            query = query.filter(Task.status == params.status)
        if params.priority is not None:
            query = query.filter(Task.priority == params.priority)
        if params.search:
            pattern = _like_pattern(params.search)
            query = query.filter(
                or_(
                    Task.title.ilike(pattern, escape="\\"),
                    Task.description.ilike(pattern, escape="\\"),
                )
            )

        return self.tasks.all(query.order_by(*self._order_clauses(params)))

    def stats(self, user: User) -> Dict[str, int]:
        """Count the caller's tasks per status; filters never apply here."""
        counts = self.tasks.count_by_status(user.id)
        per_status = {status.value: counts.get(status, 0) for status in TaskStatus}
        return {"total": sum(per_status.values()), **per_status}

    @staticmethod
    def _order_clauses(params: TaskQueryParams) -> list:
        key = SORT_FIELDS[params.sort_by]
        clauses = []
        if params.sort_by == "dueDate":
            # Undated tasks go last in either direction.
            clauses.append(Task.due_date.is_(None).asc())
        clauses.append(key.asc() if params.order == "asc" else key.desc())
        # Equal keys fall back to creation order, then id.
        clauses.append(Task.created_at.asc())
        clauses.append(Task.id.asc())
        return clauses
