# =====================================================
# FILE: task_manager/models/__init__.py
# =====================================================

from task_manager.core.database import Base

from task_manager.models.user import User
from task_manager.models.task import Task, TaskStatus, TaskPriority
from task_manager.models.audit_log import AuditLog, AuditAction

__all__ = [
    "Base",
    "User",
    "Task",
    "TaskStatus",
    "TaskPriority",
    "AuditLog",
    "AuditAction",
]
