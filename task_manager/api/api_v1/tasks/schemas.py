"""
Task Schemas
File: task_manager/api/api_v1/tasks/schemas.py
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import date, datetime

from task_manager.models.task import TaskStatus, TaskPriority
from task_manager.schemas.common import ListParams


class TaskCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    due_date: date
    status: TaskStatus
    priority: TaskPriority
    user_id: Optional[int] = Field(None, description="Admin only - assigns task to a specific user")


class TaskUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    due_date: Optional[date] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    user_id: Optional[int] = Field(None, description="Admin only - reassigns task")


class TaskFilter(ListParams):
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    due_from: Optional[date] = None
    due_to: Optional[date] = None
    search: Optional[str] = None
    user_id: Optional[int] = None


class TaskResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    status: int
    priority: int
    due_date: date
    user_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
