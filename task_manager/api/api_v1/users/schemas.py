"""
User Management Schemas
File: task_manager/api/api_v1/users/schemas.py
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime

from task_manager.core.permissions import Role
from task_manager.schemas.common import ListParams


class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=8)
    role: Role

    @field_validator('email')
    @classmethod
    def email_lowercase(cls, v):
        return v.lower()


class UserUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=8)
    role: Optional[Role] = None

    @field_validator('email')
    @classmethod
    def email_lowercase(cls, v):
        return v.lower() if v else v


class UserFilter(ListParams):
    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[Role] = None


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: str
    created_at: Optional[datetime] = None
