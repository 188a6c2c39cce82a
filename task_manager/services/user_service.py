# =====================================================
# FILE: task_manager/services/user_service.py
# User Service - admin-only user administration
# =====================================================

from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from datetime import datetime
from typing import Optional
import logging

from task_manager.core.exceptions import NotFound, ValidationError
from task_manager.core.security import hash_password
from task_manager.models.user import User
from task_manager.services.authorization import Action, Subject, authorize
from task_manager.services.query import Page, list_entities
from task_manager.services.task_service import TaskService

logger = logging.getLogger(__name__)

EMAIL_TAKEN = "The email has already been taken."


class UserService:
    """User business logic service"""

    @staticmethod
    def get_user(db: Session, user_id: int) -> User:
        user = db.query(User).filter(User.id == user_id).first()
        if not user:
            raise NotFound("User not found")
        return user

    @staticmethod
    def ensure_email_available(db: Session, email: str, exclude_user_id: Optional[int] = None) -> None:
        query = db.query(User.id).filter(User.email == email.lower())
        if exclude_user_id is not None:
            query = query.filter(User.id != exclude_user_id)
        if query.first():
            raise ValidationError(EMAIL_TAKEN)

    @staticmethod
    def create_account(db: Session, name: str, email: str, password: str, role: str) -> User:
        """
        Persist a new user with a hashed password. Shared by registration and
        admin creation; performs no authorization of its own.
        """
        UserService.ensure_email_available(db, email)

        user = User(
            name=name,
            email=email.lower(),
            password_hash=hash_password(password),
            role=role,
            created_at=datetime.utcnow(),
            updated_at=datetime.utcnow()
        )
        try:
            db.add(user)
            db.commit()
            db.refresh(user)
        except IntegrityError as e:
            db.rollback()
            logger.warning(f" Duplicate email on insert: {str(e.orig)}")
            raise ValidationError(EMAIL_TAKEN)

        logger.info(f" User created: {user.email} (ID: {user.id}, role: {user.role})")
        return user

    # =====================================================
    # ADMIN OPERATIONS
    # =====================================================

    @staticmethod
    def list_users(db: Session, actor: User, filters) -> Page:
        authorize(actor, Action.VIEW, Subject.USER)

        criteria = {
            "name": filters.name,
            "email": filters.email,
            "role": filters.role.value if filters.role is not None else None,
        }
        return list_entities(
            db, "user", criteria,
            sort=filters.sort, page=filters.page, per_page=filters.per_page
        )

    @staticmethod
    def create_user(db: Session, actor: User, data) -> User:
        authorize(actor, Action.CREATE, Subject.USER)
        return UserService.create_account(db, data.name, data.email, data.password, data.role.value)

    @staticmethod
    def update_user(db: Session, actor: User, user_id: int, data) -> User:
        authorize(actor, Action.UPDATE, Subject.USER)
        user = UserService.get_user(db, user_id)

        update_data = data.model_dump(exclude_unset=True)

        for field in ("name", "email", "password", "role"):
            if field in update_data and update_data[field] is None:
                raise ValidationError(f"The {field} field must not be null.")

        if "email" in update_data:
            update_data["email"] = update_data["email"].lower()
            UserService.ensure_email_available(db, update_data["email"], exclude_user_id=user.id)

        if "password" in update_data:
            update_data["password_hash"] = hash_password(update_data.pop("password"))

        if "role" in update_data:
            update_data["role"] = update_data["role"].value

        for field, value in update_data.items():
            setattr(user, field, value)
        user.updated_at = datetime.utcnow()

        try:
            db.commit()
            db.refresh(user)
        except IntegrityError as e:
            db.rollback()
            logger.warning(f" Duplicate email on update: {str(e.orig)}")
            raise ValidationError(EMAIL_TAKEN)

        changed = sorted(k for k in update_data if k != "password_hash")
        logger.info(f" User {user.id} updated by user {actor.id}: {changed}")
        return user

    @staticmethod
    def delete_user(db: Session, actor: User, user_id: int) -> None:
        """
        Delete a user together with the tasks they own. Each removed task gets
        its own 'deleted' audit entry; existing audit entries are kept.
        """
        authorize(actor, Action.DELETE, Subject.USER)
        user = UserService.get_user(db, user_id)

        if user.id == actor.id:
            raise ValidationError("You cannot delete your own account.")

        try:
            for task in list(user.tasks):
                TaskService.remove_with_audit(db, actor, task)
            db.expire(user, ["tasks"])
            db.delete(user)
            db.commit()
        except Exception:
            db.rollback()
            raise

        logger.info(f" User {user_id} deleted by user {actor.id}")
