"""
Medication API Schemas
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime, date


class MedicationBase(BaseModel):
    """Base schema for medication"""
    dosage: Optional[str] = Field(None, max_length=100)
    frequency: Optional[str] = Field(None, max_length=100)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    prescribed_by: Optional[str] = Field(None, max_length=200)
    notes: Optional[str] = None


class MedicationCreate(MedicationBase):
    """Schema for adding a medication"""
    user_id: Optional[int] = None
    medication_name: Optional[str] = Field(None, max_length=255)


class MedicationResponse(MedicationBase):
    """Schema for medication response"""
    id: int
    user_id: int
    medication_name: str
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True
