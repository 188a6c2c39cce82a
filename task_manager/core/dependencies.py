# =====================================================
# FILE: task_manager/core/dependencies.py
# Authentication Dependencies
# =====================================================

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session
import logging

from task_manager.core.database import get_db
from task_manager.core.exceptions import Unauthenticated
from task_manager.core.security import verify_token
from task_manager.models import User

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db)
) -> User:
    """
    Resolve the authenticated principal from the Authorization header.
    The user is reloaded on every request so role changes apply immediately.
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise Unauthenticated()

    payload = verify_token(credentials.credentials)

    user = db.query(User).filter(User.id == payload["sub"]).first()
    if not user:
        logger.warning(f" Token references missing user {payload['sub']}")
        raise Unauthenticated()

    return user
