from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from wecare.domain.records.models import MedicalRecord


class MedicalRecordRepository:
    """Repository for medical history entries"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, record_data: dict) -> MedicalRecord:
        """Create a new medical record"""
        record = MedicalRecord(**record_data)
        self.db.add(record)
        await self.db.commit()
        await self.db.refresh(record)
        return record

    async def get_recent_for_user(self, user_id: int, limit: int = 10) -> List[MedicalRecord]:
        """Get a user's most recent records, newest first"""
        result = await self.db.execute(
            select(MedicalRecord)
            .where(MedicalRecord.user_id == user_id)
            .order_by(MedicalRecord.date_recorded.desc(), MedicalRecord.id.desc())
            .limit(limit)
        )
        return result.scalars().all()
