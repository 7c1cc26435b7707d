"""
Medical context assembly

Collects the profile, active medications, latest vitals and recent symptom
history of one user into the snapshot used to render a consultation prompt.
"""

from typing import Optional, List
from datetime import datetime
import logging

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from sqlalchemy.ext.asyncio import AsyncSession

from wecare.core.config import settings
from wecare.core.exceptions import NotFoundError
from wecare.infrastructure.database import snapshot
from wecare.domain.users.models import User
from wecare.domain.users.repository import UserRepository
from wecare.domain.medications.models import Medication
from wecare.domain.medications.repository import MedicationRepository
from wecare.domain.vitals.models import VitalSign
from wecare.domain.vitals.repository import VitalSignRepository
from wecare.domain.records.models import MedicalRecord, SYMPTOM_RECORD_TYPE
from wecare.domain.records.repository import MedicalRecordRepository

logger = logging.getLogger(__name__)


class VitalsSnapshot(BaseModel):
    """Most recent vital sign reading"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    blood_pressure_systolic: Optional[int] = None
    blood_pressure_diastolic: Optional[int] = None
    heart_rate: Optional[int] = None
    temperature: Optional[float] = None
    weight: Optional[float] = None
    height: Optional[float] = None
    blood_sugar: Optional[float] = None
    recorded_at: datetime


class SymptomEntry(BaseModel):
    """Symptom entry from the medical history"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    record_type: str
    title: Optional[str] = None
    description: Optional[str] = None
    date_recorded: datetime


class MedicalContext(BaseModel):
    """Per-request snapshot of a user's health data.

    Built fresh for each consultation and never cached. Serialized with
    camelCase keys.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    age: Optional[int] = None
    gender: Optional[str] = None
    blood_type: Optional[str] = None
    allergies: Optional[str] = None
    chronic_conditions: Optional[str] = None
    current_medications: List[str] = []
    recent_vitals: Optional[VitalsSnapshot] = None
    recent_symptoms: List[SymptomEntry] = []

    @classmethod
    def assemble(
        cls,
        user: User,
        medications: List[Medication],
        vitals: List[VitalSign],
        records: List[MedicalRecord],
    ) -> "MedicalContext":
        symptoms = [r for r in records if r.record_type == SYMPTOM_RECORD_TYPE]
        return cls(
            age=user.age,
            gender=user.gender,
            blood_type=user.blood_type,
            allergies=user.allergies,
            chronic_conditions=user.chronic_conditions,
            current_medications=[m.describe() for m in medications],
            recent_vitals=VitalsSnapshot.model_validate(vitals[0]) if vitals else None,
            recent_symptoms=[
                SymptomEntry.model_validate(r)
                for r in symptoms[:settings.CONTEXT_SYMPTOMS_LIMIT]
            ],
        )


class ContextAggregator:
    """Builds MedicalContext values from the persistent store"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.user_repo = UserRepository(db)
        self.medication_repo = MedicationRepository(db)
        self.vitals_repo = VitalSignRepository(db)
        self.record_repo = MedicalRecordRepository(db)

    async def build_context(self, user_id: int) -> MedicalContext:
        """Read all context sources from one transaction and fold them"""
        async with snapshot(self.db):
            user = await self.user_repo.get_by_id(user_id)
            medications = await self.medication_repo.get_active_for_user(user_id)
            vitals = await self.vitals_repo.get_history(
                user_id=user_id, limit=settings.CONTEXT_VITALS_LIMIT
            )
            records = await self.record_repo.get_recent_for_user(
                user_id, limit=settings.CONTEXT_RECORDS_LIMIT
            )

        if user is None:
            raise NotFoundError("User not found")

        logger.debug(
            f"Built medical context for user {user_id}: "
            f"{len(medications)} medications, {len(vitals)} vitals, {len(records)} records"
        )
        return MedicalContext.assemble(user, medications, vitals, records)
