"""
Medication API Routes
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from wecare.infrastructure.database import get_db
from wecare.domain.medications.service import MedicationService
from wecare.api.v1.medications.schemas import MedicationCreate, MedicationResponse

router = APIRouter()


@router.get("", response_model=List[MedicationResponse])
async def list_medications(
    user_id: Optional[int] = Query(None, alias="userId"),
    is_active: Optional[bool] = Query(None, alias="isActive"),
    db: AsyncSession = Depends(get_db),
):
    """Medications filtered by equality on the supplied fields"""
    service = MedicationService(db)
    return await service.get_medications(user_id=user_id, is_active=is_active)


@router.post("", response_model=MedicationResponse)
async def add_medication(medication_in: MedicationCreate, db: AsyncSession = Depends(get_db)):
    service = MedicationService(db)
    return await service.add_medication(medication_in)
