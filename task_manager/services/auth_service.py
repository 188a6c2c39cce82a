# =====================================================
# FILE: task_manager/services/auth_service.py
# Credential Service - login and registration
# =====================================================

from sqlalchemy.orm import Session
from typing import Tuple
import logging

from task_manager.core.exceptions import InvalidCredentials
from task_manager.core.security import create_access_token, verify_password
from task_manager.models.user import User
from task_manager.services.user_service import UserService

logger = logging.getLogger(__name__)


class AuthService:

    @staticmethod
    def login(db: Session, email: str, password: str) -> Tuple[User, str]:
        """
        Verify credentials and issue a bearer token

        Raises:
            InvalidCredentials: unknown email or wrong password (same response)
        """
        user = db.query(User).filter(User.email == email.lower()).first()

        if not user or not verify_password(password, user.password_hash):
            logger.warning(f" Failed login attempt for: {email}")
            raise InvalidCredentials()

        token = create_access_token(user.id, user.role)
        logger.info(f" User logged in: {user.email}")
        return user, token

    @staticmethod
    def register(db: Session, name: str, email: str, password: str, role: str) -> Tuple[User, str]:
        """
        Create the account and log it in straight away
        """
        logger.info(f" Starting registration for: {email}")
        user = UserService.create_account(db, name, email, password, role)
        token = create_access_token(user.id, user.role)
        return user, token
