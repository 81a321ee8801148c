"""
Pydantic schemas for user-related request/response validation.
"""

import enum

from pydantic import BaseModel, EmailStr, Field


class Role(str, enum.Enum):
    MEMBER = "member"
    COACH = "coach"
    ADMIN = "admin"


class User(BaseModel):
    id: str
    name: str
    email: EmailStr
    role: Role

    model_config = {"frozen": True}


class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    role: Role = Role.MEMBER


class UserLogin(BaseModel):
    email: EmailStr
