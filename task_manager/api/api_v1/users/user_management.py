# =====================================================
# FILE: task_manager/api/api_v1/users/user_management.py
# User Management API Endpoints (admin only)
# =====================================================

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import Literal, Optional
import logging

from task_manager.core.config import settings
from task_manager.core.database import get_db
from task_manager.core.dependencies import get_current_user
from task_manager.core.exceptions import server_error_from
from task_manager.core.permissions import Role
from task_manager.core.responses import success_response
from task_manager.models.user import User
from task_manager.api.api_v1.users.schemas import (
    UserCreate,
    UserUpdate,
    UserFilter,
    UserResponse
)
from task_manager.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])


def serialize_user(user) -> dict:
    return UserResponse.model_validate(user).model_dump(mode="json")


@router.get("")
async def list_users(
    name: Optional[str] = Query(None, description="Filter by user name"),
    email: Optional[str] = Query(None, description="Filter by email"),
    role: Optional[Role] = Query(None, description="Filter by role"),
    sort: Literal["asc", "desc"] = Query("asc", description="Sort order by name"),
    page: int = Query(1, ge=1, le=settings.MAX_PAGE, description="Page number"),
    per_page: int = Query(settings.DEFAULT_PER_PAGE, ge=1, le=settings.MAX_PER_PAGE, description="Items per page"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    try:
        filters = UserFilter(
            name=name,
            email=email,
            role=role,
            sort=sort,
            page=page,
            per_page=per_page
        )
        result = UserService.list_users(db, current_user, filters)
        return success_response(result.to_dict(serialize_user), "Users List")

    except HTTPException:
        raise

    except Exception as e:
        logger.error(f" Error listing users: {str(e)}", exc_info=True)
        raise server_error_from(e)


@router.post("")
async def create_user(
    user_data: UserCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    try:
        user = UserService.create_user(db, current_user, user_data)
        return success_response(serialize_user(user), "User Created Successfully")

    except HTTPException:
        raise

    except Exception as e:
        logger.error(f" Error creating user: {str(e)}", exc_info=True)
        raise server_error_from(e)


@router.put("/{user_id}")
async def update_user(
    user_id: int,
    user_data: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    try:
        user = UserService.update_user(db, current_user, user_id, user_data)
        return success_response(serialize_user(user), "User Updated Successfully")

    except HTTPException:
        raise

    except Exception as e:
        logger.error(f" Error updating user {user_id}: {str(e)}", exc_info=True)
        raise server_error_from(e)


@router.delete("/{user_id}")
async def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    try:
        UserService.delete_user(db, current_user, user_id)
        return success_response([], "User Deleted Successfully")

    except HTTPException:
        raise

    except Exception as e:
        logger.error(f" Error deleting user {user_id}: {str(e)}", exc_info=True)
        raise server_error_from(e)
