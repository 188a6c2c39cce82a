# =====================================================
# FILE: task_manager/models/audit_log.py
# Audit Log Model - append-only history of task changes
# =====================================================

from sqlalchemy import Column, String, Integer, DateTime, JSON
from datetime import datetime
import enum

from task_manager.core.database import Base


class AuditAction(str, enum.Enum):
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"


class AuditLog(Base):
    """
    Entries outlive the task and the actor they reference, so user_id and
    task_id are plain indexed columns rather than cascading foreign keys.
    """
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, nullable=True, index=True)
    task_id = Column(Integer, nullable=False, index=True)
    action = Column(String(50), nullable=False)  # created, updated, deleted
    old_values = Column(JSON, nullable=True)
    new_values = Column(JSON, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    def __repr__(self):
        return f"<AuditLog {self.action} task={self.task_id} by user={self.user_id}>"
