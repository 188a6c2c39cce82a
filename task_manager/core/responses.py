# =====================================================
# FILE: task_manager/core/responses.py
# Uniform {success, message, data} Response Envelope
# =====================================================

from typing import Any, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def success_response(data: Any = None, message: str = "") -> dict:
    return {
        "success": True,
        "message": message,
        "data": jsonable_encoder(data) if data is not None else [],
    }


def error_response(message: str, status_code: int, headers: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message, "data": []},
        headers=headers,
    )
