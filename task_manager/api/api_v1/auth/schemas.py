"""
Authentication Schemas
File: task_manager/api/api_v1/auth/schemas.py
"""

from pydantic import BaseModel, EmailStr, Field, field_validator

from task_manager.core.permissions import Role


class UserRegistration(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=8)
    role: Role

    @field_validator('email')
    @classmethod
    def email_lowercase(cls, v):
        return v.lower()


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator('email')
    @classmethod
    def email_lowercase(cls, v):
        return v.lower()


class AuthenticatedUser(BaseModel):
    id: int
    name: str
    email: str
    role: str
    access_token: str
    token_type: str = "bearer"
