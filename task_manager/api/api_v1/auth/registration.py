"""
Registration Endpoint
File: task_manager/api/api_v1/auth/registration.py
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
import logging

from task_manager.core.database import get_db
from task_manager.core.exceptions import server_error_from
from task_manager.core.responses import success_response
from task_manager.api.api_v1.auth.schemas import UserRegistration, AuthenticatedUser
from task_manager.services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register")
async def register_user(
    user_data: UserRegistration,
    db: Session = Depends(get_db)
):
    """Register a new user and log them in"""
    try:
        user, token = AuthService.register(
            db,
            name=user_data.name,
            email=user_data.email,
            password=user_data.password,
            role=user_data.role.value
        )

        data = AuthenticatedUser(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role,
            access_token=token
        )
        return success_response(data.model_dump(), "User Registered Successfully")

    except HTTPException:
        raise

    except Exception as e:
        logger.error(f" Registration error: {str(e)}", exc_info=True)
        raise server_error_from(e)
