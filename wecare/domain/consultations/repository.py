from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from wecare.domain.consultations.models import Consultation


class ConsultationRepository:
    """Repository for AI consultation records"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, consultation_data: dict) -> Consultation:
        """Append a consultation"""
        consultation = Consultation(**consultation_data)
        self.db.add(consultation)
        await self.db.commit()
        await self.db.refresh(consultation)
        return consultation

    async def get_user_consultations(self, user_id: int, limit: int = 20) -> List[Consultation]:
        """Get a user's consultations, newest first"""
        result = await self.db.execute(
            select(Consultation)
            .where(Consultation.user_id == user_id)
            .order_by(Consultation.created_at.desc(), Consultation.id.desc())
            .limit(limit)
        )
        return result.scalars().all()
