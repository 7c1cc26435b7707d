"""
Vital Signs API Routes
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from wecare.core.config import settings
from wecare.infrastructure.database import get_db
from wecare.domain.vitals.service import VitalSignService
from wecare.api.v1.vitals.schemas import VitalSignCreate, VitalSignResponse

router = APIRouter()


@router.get("", response_model=List[VitalSignResponse])
async def list_vital_signs(
    user_id: Optional[int] = Query(None, alias="userId"),
    limit: int = Query(settings.DEFAULT_VITALS_LIMIT, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
):
    """Vital signs history, newest first"""
    service = VitalSignService(db)
    return await service.get_vital_signs(user_id=user_id, limit=limit)


@router.post("", response_model=VitalSignResponse)
async def record_vital_signs(vitals_in: VitalSignCreate, db: AsyncSession = Depends(get_db)):
    service = VitalSignService(db)
    return await service.record_vital_signs(vitals_in)
