"""
Login Endpoint
File: task_manager/api/api_v1/auth/login.py
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
import logging

from task_manager.core.database import get_db
from task_manager.core.exceptions import server_error_from
from task_manager.core.responses import success_response
from task_manager.api.api_v1.auth.schemas import LoginRequest, AuthenticatedUser
from task_manager.services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/login")
async def login(
    credentials: LoginRequest,
    db: Session = Depends(get_db)
):
    """Exchange email and password for a bearer token"""
    try:
        user, token = AuthService.login(db, credentials.email, credentials.password)

        data = AuthenticatedUser(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role,
            access_token=token
        )
        return success_response(data.model_dump(), "User Logged In Successfully")

    except HTTPException:
        raise

    except Exception as e:
        logger.error(f" Login error: {str(e)}", exc_info=True)
        raise server_error_from(e)
