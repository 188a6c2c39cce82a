# =====================================================
# FILE: task_manager/services/query.py
# Declarative Filtering, Sorting and Pagination
# =====================================================

from dataclasses import dataclass, field
from math import ceil
from typing import Any, Callable, Dict, List, Mapping, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from task_manager.core.config import settings
from task_manager.models.audit_log import AuditLog
from task_manager.models.task import Task
from task_manager.models.user import User

FilterBuilder = Callable[[Any], Any]


def _like_pattern(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def exact(column) -> FilterBuilder:
    return lambda value: column == value


def contains(column) -> FilterBuilder:
    """Case-insensitive substring match"""
    return lambda value: column.ilike(_like_pattern(value), escape="\\")


def on_or_after(column) -> FilterBuilder:
    return lambda value: column >= value


def on_or_before(column) -> FilterBuilder:
    return lambda value: column <= value


def search(*columns) -> FilterBuilder:
    """Case-insensitive substring match against any of the columns"""
    return lambda value: or_(*(c.ilike(_like_pattern(value), escape="\\") for c in columns))


@dataclass(frozen=True)
class Listing:
    model: Any
    sort_column: Any
    filters: Dict[str, FilterBuilder] = field(default_factory=dict)


LISTINGS: Dict[str, Listing] = {
    "task": Listing(
        model=Task,
        sort_column=Task.due_date,
        filters={
            "status": exact(Task.status),
            "priority": exact(Task.priority),
            "due_from": on_or_after(Task.due_date),
            "due_to": on_or_before(Task.due_date),
            "search": search(Task.title, Task.description),
            "user_id": exact(Task.user_id),
        },
    ),
    "user": Listing(
        model=User,
        sort_column=User.name,
        filters={
            "name": contains(User.name),
            "email": contains(User.email),
            "role": exact(User.role),
        },
    ),
    "audit_log": Listing(
        model=AuditLog,
        sort_column=AuditLog.created_at,
        filters={
            "user_id": exact(AuditLog.user_id),
        },
    ),
}


@dataclass
class Page:
    items: List[Any]
    current_page: int
    per_page: int
    total: int

    @property
    def last_page(self) -> int:
        return max(1, ceil(self.total / self.per_page))

    def to_dict(self, serialize: Callable[[Any], Any]) -> dict:
        return {
            "data": [serialize(item) for item in self.items],
            "current_page": self.current_page,
            "per_page": self.per_page,
            "total": self.total,
            "last_page": self.last_page,
        }


def list_entities(
    db: Session,
    kind: str,
    filters: Optional[Mapping[str, Any]] = None,
    sort: str = "asc",
    page: int = 1,
    per_page: Optional[int] = None,
) -> Page:
    """
    Build the conjunction of the present filters, order by the listing's sort
    column (ties broken by id ascending) and return the requested page.

    page and per_page are clamped to the configured bounds. Filters whose value
    is None or an empty string are ignored. Unknown filter names raise KeyError.
    """
    listing = LISTINGS[kind]
    per_page = min(max(1, per_page or settings.DEFAULT_PER_PAGE), settings.MAX_PER_PAGE)
    page = min(max(1, page), settings.MAX_PAGE)

    query = db.query(listing.model)
    for name, value in (filters or {}).items():
        if value is None or value == "":
            continue
        query = query.filter(listing.filters[name](value))

    total = query.count()

    sort_column = listing.sort_column.desc() if sort == "desc" else listing.sort_column.asc()
    items = (
        query.order_by(sort_column, listing.model.id.asc())
        .offset((page - 1) * per_page)
        .limit(per_page)
        .all()
    )

    return Page(items=items, current_page=page, per_page=per_page, total=total)
