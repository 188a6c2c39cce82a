# =====================================================
# FILE: task_manager/schemas/audit_trail.py
# Pydantic Schemas for Audit Trail API
# =====================================================

from pydantic import BaseModel, ConfigDict, field_serializer
from typing import Any, Dict, Optional
from datetime import datetime

from task_manager.utils.datetime_helpers import format_datetime_to_iso


class AuditLogResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: Optional[int]
    task_id: int
    action: str
    old_values: Optional[Dict[str, Any]]
    new_values: Optional[Dict[str, Any]]
    created_at: datetime

    @field_serializer("created_at")
    def serialize_created_at(self, value: datetime) -> Optional[str]:
        return format_datetime_to_iso(value)
