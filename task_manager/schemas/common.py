# =====================================================
# FILE: task_manager/schemas/common.py
# Shared Request / Response Schemas
# =====================================================

from pydantic import BaseModel, Field
from typing import Literal

from task_manager.core.config import settings


SortOrder = Literal["asc", "desc"]


class ListParams(BaseModel):
    sort: SortOrder = "asc"
    page: int = Field(1, ge=1, le=settings.MAX_PAGE)
    per_page: int = Field(default_factory=lambda: settings.DEFAULT_PER_PAGE, ge=1, le=settings.MAX_PER_PAGE)


