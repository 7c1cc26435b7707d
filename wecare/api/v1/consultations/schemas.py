"""
AI Consultation API Schemas
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from wecare.domain.consultations.context import MedicalContext


class ConsultationCreate(BaseModel):
    """Schema for requesting a consultation"""
    user_id: Optional[int] = None
    symptoms: Optional[str] = Field(None, max_length=5000)
    consultation_type: Optional[str] = None


class ConsultationResponse(BaseModel):
    """Schema for consultation response"""
    id: int
    user_id: int
    symptoms: str
    consultation_type: str
    prompt: str
    ai_response: str
    confidence_score: Optional[float] = None
    created_at: datetime

    class Config:
        from_attributes = True


class ConsultationResult(BaseModel):
    """Persisted consultation plus the context it was generated from"""
    consultation: ConsultationResponse
    medical_context: MedicalContext = Field(..., alias="medicalContext")

    class Config:
        populate_by_name = True
