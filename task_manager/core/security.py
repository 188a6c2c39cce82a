# =====================================================
# FILE: task_manager/core/security.py
# Password Hashing and Bearer Token Handling
# =====================================================

from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import bcrypt
import jwt

from task_manager.core.config import settings
from task_manager.core.exceptions import Unauthenticated


def hash_password(password: str) -> str:
    password_bytes = password.encode("utf-8")
    salt = bcrypt.gensalt()
    return bcrypt.hashpw(password_bytes, salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def create_access_token(user_id: int, role: str) -> str:
    """
    Issue a signed token carrying the user's identity and role
    """
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "role": role,
        "iat": now,
        "exp": now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    }
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def verify_token(token: str) -> Dict[str, Any]:
    """
    Decode and validate a bearer token

    Raises:
        Unauthenticated: bad signature, malformed or expired token
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise Unauthenticated("Token has expired.")
    except jwt.InvalidTokenError:
        raise Unauthenticated()

    try:
        payload["sub"] = int(payload["sub"])
    except (TypeError, ValueError):
        raise Unauthenticated()

    return payload
