# =====================================================
# FILE: task_manager/api/api_v1/reports/audit_trail.py
# Audit Log Listing
# =====================================================

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import Literal
import logging

from task_manager.core.config import settings
from task_manager.core.database import get_db
from task_manager.core.dependencies import get_current_user
from task_manager.core.exceptions import server_error_from
from task_manager.core.responses import success_response
from task_manager.models.user import User
from task_manager.schemas.audit_trail import AuditLogResponse
from task_manager.services.audit_service import AuditService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/audit-logs", tags=["Audit Logs"])


def serialize_entry(entry) -> dict:
    return AuditLogResponse.model_validate(entry).model_dump(mode="json")


@router.get("")
async def get_audit_logs(
    sort: Literal["asc", "desc"] = Query("desc", description="Sort order by creation time"),
    page: int = Query(1, ge=1, le=settings.MAX_PAGE, description="Page number"),
    per_page: int = Query(settings.DEFAULT_PER_PAGE, ge=1, le=settings.MAX_PER_PAGE, description="Items per page"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Audit trail of task changes. Admins see every entry, other users see
    the changes they made.
    """
    try:
        result = AuditService(db).list(current_user, sort=sort, page=page, per_page=per_page)

        logger.info(f" Retrieved {len(result.items)} audit logs for user {current_user.email}")
        return success_response(result.to_dict(serialize_entry), "AuditLogs List")

    except HTTPException:
        raise

    except Exception as e:
        logger.error(f" Error fetching audit logs: {str(e)}", exc_info=True)
        raise server_error_from(e)
