from typing import Optional, List
import logging
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from wecare.core.exceptions import ValidationError, handle_database_error
from wecare.domain.medications.models import Medication
from wecare.domain.medications.repository import MedicationRepository
from wecare.api.v1.medications.schemas import MedicationCreate

logger = logging.getLogger(__name__)


class MedicationService:
    """Service layer for medications"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.medication_repo = MedicationRepository(db)

    async def add_medication(self, medication_data: MedicationCreate) -> Medication:
        """Add a medication to a user's list"""
        if not medication_data.user_id or not medication_data.medication_name:
            raise ValidationError("User ID and medication name are required")

        try:
            medication = await self.medication_repo.create(medication_data.model_dump())
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise handle_database_error(e, "Failed to create medication", "create medication") from e

        logger.info(f"Added medication {medication.id} for user {medication.user_id}")
        return medication

    async def get_medications(
        self,
        user_id: Optional[int] = None,
        is_active: Optional[bool] = None
    ) -> List[Medication]:
        """Get medications filtered by user and active flag"""
        try:
            return await self.medication_repo.get_all(user_id=user_id, is_active=is_active)
        except SQLAlchemyError as e:
            raise handle_database_error(e, "Failed to fetch medications", "list medications") from e
