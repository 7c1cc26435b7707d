"""
AI Consultation API Routes
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from wecare.core.config import settings
from wecare.infrastructure.database import get_db
from wecare.domain.consultations.service import ConsultationService
from wecare.api.v1.consultations.schemas import (
    ConsultationCreate, ConsultationResponse, ConsultationResult
)

router = APIRouter()


@router.get("", response_model=List[ConsultationResponse])
async def list_consultations(
    user_id: Optional[int] = Query(None, alias="userId"),
    limit: int = Query(settings.DEFAULT_CONSULTATIONS_LIMIT, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
):
    """A user's consultations, newest first"""
    service = ConsultationService(db)
    return await service.list_consultations(user_id, limit=limit)


@router.post("", response_model=ConsultationResult)
async def request_consultation(request: ConsultationCreate, db: AsyncSession = Depends(get_db)):
    """Generate a consultation from symptoms and the user's medical context"""
    service = ConsultationService(db)
    consultation, context = await service.request_consultation(
        user_id=request.user_id,
        symptoms=request.symptoms,
        consultation_type=request.consultation_type,
    )
    return ConsultationResult(
        consultation=ConsultationResponse.model_validate(consultation),
        medicalContext=context,
    )
