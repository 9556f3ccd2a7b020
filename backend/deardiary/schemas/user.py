"""
Pydantic schemas for User entity.
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class UserCreate(BaseModel):
    """Schema for registration. Fields are checked by the user service."""
    email: Optional[str] = None
    name: Optional[str] = None
    password: Optional[str] = None


class UserLogin(BaseModel):
    """Schema for user login."""
    email: Optional[str] = None
    password: Optional[str] = None


class UserResponse(BaseModel):
    """Public projection of a user; never includes the password hash."""
    id: int
    email: str
    name: str
    created_at: datetime = Field(alias="createdAt")

    class Config:
        from_attributes = True
        populate_by_name = True


class UserEnvelope(BaseModel):
    user: UserResponse


class MessageResponse(BaseModel):
    message: str
