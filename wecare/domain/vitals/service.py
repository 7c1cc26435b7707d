from typing import Optional, List
import logging
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from wecare.core.exceptions import ValidationError, handle_database_error
from wecare.domain.vitals.models import VitalSign
from wecare.domain.vitals.repository import VitalSignRepository
from wecare.api.v1.vitals.schemas import VitalSignCreate

logger = logging.getLogger(__name__)


class VitalSignService:
    """Service layer for vital signs"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.vitals_repo = VitalSignRepository(db)

    async def record_vital_signs(self, vitals_data: VitalSignCreate) -> VitalSign:
        """Record a new set of vital signs"""
        if not vitals_data.user_id:
            raise ValidationError("User ID is required")

        try:
            vitals = await self.vitals_repo.create(vitals_data.model_dump())
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise handle_database_error(e, "Failed to create vital signs", "create vital signs") from e

        logger.info(f"Recorded vital signs {vitals.id} for user {vitals.user_id}")
        return vitals

    async def get_vital_signs(self, user_id: Optional[int] = None, limit: int = 50) -> List[VitalSign]:
        """Get vital signs history, newest first"""
        try:
            return await self.vitals_repo.get_history(user_id=user_id, limit=limit)
        except SQLAlchemyError as e:
            raise handle_database_error(e, "Failed to fetch vital signs", "list vital signs") from e
