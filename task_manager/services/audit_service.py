# =====================================================
# FILE: task_manager/services/audit_service.py
# Service Layer for the Task Audit Trail
# =====================================================

from sqlalchemy.orm import Session
from datetime import datetime
from typing import Optional, Dict, Any, Iterable
import enum
import logging

from task_manager.models.audit_log import AuditLog, AuditAction
from task_manager.models.task import Task
from task_manager.models.user import User
from task_manager.core.permissions import Permission, has_permission
from task_manager.services.query import Page, list_entities
from task_manager.utils.datetime_helpers import format_date

logger = logging.getLogger(__name__)

TASK_SNAPSHOT_FIELDS = ("title", "description", "status", "priority", "due_date", "user_id")


def _json_safe(value: Any) -> Any:
    if isinstance(value, enum.Enum):
        return value.value
    if hasattr(value, "isoformat"):
        return format_date(value)
    return value


def snapshot(task: Task, fields: Optional[Iterable[str]] = None) -> Dict[str, Any]:
    """
    Field-level mapping of a task's current values, JSON-safe
    """
    names = TASK_SNAPSHOT_FIELDS if fields is None else fields
    return {name: _json_safe(getattr(task, name)) for name in names}


class AuditService:
    """
    Append-only recorder for task mutations
    """

    def __init__(self, db: Session):
        self.db = db

    def record(
        self,
        actor: User,
        task: Task,
        action: AuditAction,
        old_values: Optional[Dict[str, Any]] = None,
        new_values: Optional[Dict[str, Any]] = None
    ) -> AuditLog:
        """
        Append an audit entry inside the caller's transaction.
        The caller commits, so the entry and the task change land together.
        """
        entry = AuditLog(
            user_id=actor.id,
            task_id=task.id,
            action=action.value,
            old_values=old_values,
            new_values=new_values,
            created_at=datetime.utcnow()
        )
        self.db.add(entry)
        self.db.flush()

        logger.info(f" Audit log recorded: task {task.id} {action.value} by user {actor.id}")
        return entry

    def list(
        self,
        actor: User,
        sort: str = "desc",
        page: int = 1,
        per_page: Optional[int] = None
    ) -> Page:
        """
        Admins see every entry; everyone else sees the entries they caused
        """
        filters = {}
        if not has_permission(actor.role, Permission.AUDIT_VIEW_ANY):
            filters["user_id"] = actor.id

        return list_entities(self.db, "audit_log", filters, sort=sort, page=page, per_page=per_page)
