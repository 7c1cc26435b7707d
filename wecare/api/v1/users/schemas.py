"""
User API Schemas
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class UserBase(BaseModel):
    """Base schema for user profile"""
    age: Optional[int] = Field(None, ge=0, le=150)
    gender: Optional[str] = None
    blood_type: Optional[str] = None
    allergies: Optional[str] = None
    chronic_conditions: Optional[str] = None
    emergency_contact: Optional[str] = None


class UserCreate(UserBase):
    """Schema for creating user; name and email are checked by the service"""
    name: Optional[str] = None
    email: Optional[str] = None


class UserResponse(UserBase):
    """Schema for user response"""
    id: int
    name: str
    email: str
    created_at: datetime

    class Config:
        from_attributes = True
