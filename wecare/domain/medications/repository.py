from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from wecare.domain.medications.models import Medication


class MedicationRepository:
    """Repository for medication data access operations"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, medication_data: dict) -> Medication:
        """Create a new medication"""
        medication = Medication(**medication_data)
        self.db.add(medication)
        await self.db.commit()
        await self.db.refresh(medication)
        return medication

    async def get_all(
        self,
        user_id: Optional[int] = None,
        is_active: Optional[bool] = None
    ) -> List[Medication]:
        """Get medications filtered by equality on the supplied fields"""
        query = select(Medication)

        if user_id is not None:
            query = query.where(Medication.user_id == user_id)

        if is_active is not None:
            query = query.where(Medication.is_active == is_active)

        query = query.order_by(Medication.created_at.desc(), Medication.id.desc())

        result = await self.db.execute(query)
        return result.scalars().all()

    async def get_active_for_user(self, user_id: int) -> List[Medication]:
        """Get a user's active medications"""
        return await self.get_all(user_id=user_id, is_active=True)
