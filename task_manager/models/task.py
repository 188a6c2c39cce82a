# =====================================================
# FILE: task_manager/models/task.py
# =====================================================

from sqlalchemy import Column, String, DateTime, Integer, ForeignKey, Text, Date
from sqlalchemy.orm import relationship
from datetime import datetime
import enum

from task_manager.core.database import Base


class TaskStatus(enum.IntEnum):
    PENDING = 1
    IN_PROGRESS = 2
    DONE = 3


class TaskPriority(enum.IntEnum):
    LOW = 1
    MEDIUM = 2
    HIGH = 3


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    status = Column(Integer, nullable=False, default=TaskStatus.PENDING.value, index=True)
    priority = Column(Integer, nullable=False, default=TaskPriority.MEDIUM.value, index=True)
    due_date = Column(Date, nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    owner = relationship("User", back_populates="tasks")

    def __repr__(self):
        return f"<Task {self.id}: {self.title} (status={self.status})>"
