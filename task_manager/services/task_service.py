# =====================================================
# FILE: task_manager/services/task_service.py
# Task Service - ownership-aware CRUD with an audit trail
# =====================================================

from sqlalchemy.orm import Session
from datetime import datetime
from typing import Any, Dict
import logging

from task_manager.core.exceptions import NotFound, ValidationError
from task_manager.models.audit_log import AuditAction
from task_manager.models.task import Task
from task_manager.models.user import User
from task_manager.services.audit_service import AuditService, snapshot
from task_manager.services.authorization import Action, Subject, authorize, can, can_act_on_any
from task_manager.services.query import Page, list_entities

logger = logging.getLogger(__name__)


class TaskService:
    """Task business logic service"""

    # =====================================================
    # HELPERS
    # =====================================================

    @staticmethod
    def get_task(db: Session, task_id: int) -> Task:
        task = db.query(Task).filter(Task.id == task_id).first()
        if not task:
            raise NotFound("Task not found")
        return task

    @staticmethod
    def _resolve_owner(db: Session, actor: User, requested_user_id) -> int:
        """
        Only admins may pick the owner; anyone else always owns what they create
        """
        if requested_user_id is None or not can(actor, Action.ASSIGN, Subject.TASK):
            return actor.id

        if not db.query(User.id).filter(User.id == requested_user_id).first():
            raise ValidationError("The selected user id is invalid.")
        return requested_user_id

    # =====================================================
    # LIST TASKS
    # =====================================================

    @staticmethod
    def list_tasks(db: Session, actor: User, filters) -> Page:
        """
        Admins list every task (optionally narrowed by user_id);
        everyone else lists only their own.
        """
        authorize(actor, Action.VIEW, Subject.TASK)

        criteria = {
            "status": filters.status.value if filters.status is not None else None,
            "priority": filters.priority.value if filters.priority is not None else None,
            "due_from": filters.due_from,
            "due_to": filters.due_to,
            "search": filters.search,
            "user_id": filters.user_id,
        }
        if not can_act_on_any(actor, Action.VIEW, Subject.TASK):
            criteria["user_id"] = actor.id

        return list_entities(
            db, "task", criteria,
            sort=filters.sort, page=filters.page, per_page=filters.per_page
        )

    # =====================================================
    # CREATE TASK
    # =====================================================

    @staticmethod
    def create_task(db: Session, actor: User, data) -> Task:
        authorize(actor, Action.CREATE, Subject.TASK)

        try:
            task = Task(
                title=data.title,
                description=data.description,
                due_date=data.due_date,
                status=data.status.value,
                priority=data.priority.value,
                user_id=TaskService._resolve_owner(db, actor, data.user_id),
                created_at=datetime.utcnow(),
                updated_at=datetime.utcnow()
            )
            db.add(task)
            db.flush()

            AuditService(db).record(actor, task, AuditAction.CREATED, new_values=snapshot(task))

            db.commit()
            db.refresh(task)
        except Exception:
            db.rollback()
            raise

        logger.info(f" Task {task.id} created by user {actor.id} for user {task.user_id}")
        return task

    # =====================================================
    # UPDATE TASK
    # =====================================================

    @staticmethod
    def update_task(db: Session, actor: User, task_id: int, data) -> Task:
        task = TaskService.get_task(db, task_id)
        authorize(actor, Action.UPDATE, Subject.TASK, owner_id=task.user_id)

        update_data: Dict[str, Any] = data.model_dump(exclude_unset=True)

        # Reassignment is admin only; for others the field is dropped
        if "user_id" in update_data:
            if update_data["user_id"] is None or not can(actor, Action.ASSIGN, Subject.TASK):
                update_data.pop("user_id")
            else:
                update_data["user_id"] = TaskService._resolve_owner(db, actor, update_data["user_id"])

        for field in ("title", "description", "due_date", "status", "priority"):
            if field in update_data and update_data[field] is None:
                raise ValidationError(f"The {field} field must not be null.")

        try:
            changed_fields = list(update_data)
            old_values = snapshot(task, changed_fields)

            for field, value in update_data.items():
                setattr(task, field, int(value) if field in ("status", "priority") else value)
            task.updated_at = datetime.utcnow()
            db.flush()

            AuditService(db).record(
                actor, task, AuditAction.UPDATED,
                old_values=old_values,
                new_values=snapshot(task, changed_fields)
            )

            db.commit()
            db.refresh(task)
        except Exception:
            db.rollback()
            raise

        logger.info(f" Task {task.id} updated by user {actor.id}: {sorted(update_data)}")
        return task

    # =====================================================
    # DELETE TASK
    # =====================================================

    @staticmethod
    def delete_task(db: Session, actor: User, task_id: int) -> None:
        task = TaskService.get_task(db, task_id)
        authorize(actor, Action.DELETE, Subject.TASK, owner_id=task.user_id)

        try:
            TaskService.remove_with_audit(db, actor, task)
            db.commit()
        except Exception:
            db.rollback()
            raise

        logger.info(f" Task {task_id} deleted by user {actor.id}")

    @staticmethod
    def remove_with_audit(db: Session, actor: User, task: Task) -> None:
        """Delete a task and append its final snapshot, without committing"""
        AuditService(db).record(actor, task, AuditAction.DELETED, old_values=snapshot(task))
        db.delete(task)
        db.flush()
