"""
Vital Signs API Schemas
"""

from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class VitalSignBase(BaseModel):
    """Base schema for vital signs"""
    blood_pressure_systolic: Optional[int] = None
    blood_pressure_diastolic: Optional[int] = None
    heart_rate: Optional[int] = None
    temperature: Optional[float] = None
    weight: Optional[float] = None
    height: Optional[float] = None
    blood_sugar: Optional[float] = None


class VitalSignCreate(VitalSignBase):
    """Schema for recording vital signs"""
    user_id: Optional[int] = None


class VitalSignResponse(VitalSignBase):
    """Schema for vital signs response"""
    id: int
    user_id: int
    recorded_at: datetime

    class Config:
        from_attributes = True
