# =====================================================
# FILE: task_manager/api/api_v1/tasks/tasks.py
# Task API Endpoints
# =====================================================

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import Literal, Optional
from datetime import date
import logging

from task_manager.core.config import settings
from task_manager.core.database import get_db
from task_manager.core.dependencies import get_current_user
from task_manager.core.exceptions import server_error_from
from task_manager.core.responses import success_response
from task_manager.models.user import User
from task_manager.api.api_v1.tasks.schemas import (
    TaskCreate,
    TaskUpdate,
    TaskFilter,
    TaskResponse
)
from task_manager.services.task_service import TaskService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks", tags=["Tasks"])


def serialize_task(task) -> dict:
    return TaskResponse.model_validate(task).model_dump(mode="json")


# =====================================================
# LIST TASKS
# =====================================================

@router.get("")
async def list_tasks(
    status: Optional[int] = Query(None, ge=1, le=3, description="1=Pending, 2=InProgress, 3=Done"),
    priority: Optional[int] = Query(None, ge=1, le=3, description="1=Low, 2=Medium, 3=High"),
    due_from: Optional[date] = Query(None, description="Tasks due on or after this date"),
    due_to: Optional[date] = Query(None, description="Tasks due on or before this date"),
    search: Optional[str] = Query(None, description="Search in title and description"),
    user_id: Optional[int] = Query(None, description="Admin only - tasks of a specific user"),
    sort: Literal["asc", "desc"] = Query("asc", description="Sort order by due date"),
    page: int = Query(1, ge=1, le=settings.MAX_PAGE, description="Page number"),
    per_page: int = Query(settings.DEFAULT_PER_PAGE, ge=1, le=settings.MAX_PER_PAGE, description="Items per page"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    try:
        filters = TaskFilter(
            status=status,
            priority=priority,
            due_from=due_from,
            due_to=due_to,
            search=search,
            user_id=user_id,
            sort=sort,
            page=page,
            per_page=per_page
        )
        result = TaskService.list_tasks(db, current_user, filters)
        return success_response(result.to_dict(serialize_task), "Tasks List")

    except HTTPException:
        raise

    except Exception as e:
        logger.error(f" Error listing tasks: {str(e)}", exc_info=True)
        raise server_error_from(e)


# =====================================================
# CREATE TASK
# =====================================================

@router.post("")
async def create_task(
    task_data: TaskCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    try:
        task = TaskService.create_task(db, current_user, task_data)
        return success_response(serialize_task(task), "Task Created Successfully")

    except HTTPException:
        raise

    except Exception as e:
        logger.error(f" Error creating task: {str(e)}", exc_info=True)
        raise server_error_from(e)


# =====================================================
# UPDATE TASK
# =====================================================

@router.put("/{task_id}")
async def update_task(
    task_id: int,
    task_data: TaskUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    try:
        task = TaskService.update_task(db, current_user, task_id, task_data)
        return success_response(serialize_task(task), "Task Updated Successfully")

    except HTTPException:
        raise

    except Exception as e:
        logger.error(f" Error updating task {task_id}: {str(e)}", exc_info=True)
        raise server_error_from(e)


# =====================================================
# DELETE TASK
# =====================================================

@router.delete("/{task_id}")
async def delete_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    try:
        TaskService.delete_task(db, current_user, task_id)
        return success_response([], "Task Deleted Successfully")

    except HTTPException:
        raise

    except Exception as e:
        logger.error(f" Error deleting task {task_id}: {str(e)}", exc_info=True)
        raise server_error_from(e)
