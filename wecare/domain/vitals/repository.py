from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from wecare.domain.vitals.models import VitalSign


class VitalSignRepository:
    """Repository for vital signs data access operations"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, vitals_data: dict) -> VitalSign:
        """Create a new vital signs record"""
        vitals = VitalSign(**vitals_data)
        self.db.add(vitals)
        await self.db.commit()
        await self.db.refresh(vitals)
        return vitals

    async def get_history(
        self,
        user_id: Optional[int] = None,
        limit: int = 50
    ) -> List[VitalSign]:
        """Get vital signs history, newest first"""
        query = select(VitalSign)

        if user_id is not None:
            query = query.where(VitalSign.user_id == user_id)

        query = query.order_by(VitalSign.recorded_at.desc(), VitalSign.id.desc()).limit(limit)

        result = await self.db.execute(query)
        return result.scalars().all()
