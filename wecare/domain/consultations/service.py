"""
Consultation Service Layer

Validates a consultation request, assembles the medical context, renders the
prompt, obtains the AI answer and appends the consultation record.
"""

from typing import Optional, List, Tuple
import logging
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from wecare.core.config import settings
from wecare.core.exceptions import ValidationError, handle_database_error
from wecare.domain.consultations.models import Consultation, ConsultationType
from wecare.domain.consultations.repository import ConsultationRepository
from wecare.domain.consultations.context import ContextAggregator, MedicalContext
from wecare.domain.consultations.prompts import build_prompt
from wecare.services import ai_service

logger = logging.getLogger(__name__)


class ConsultationService:
    """Service layer for AI consultations"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.consultation_repo = ConsultationRepository(db)
        self.aggregator = ContextAggregator(db)

    async def request_consultation(
        self,
        user_id: Optional[int],
        symptoms: Optional[str],
        consultation_type: Optional[str] = None
    ) -> Tuple[Consultation, MedicalContext]:
        """Generate and persist a consultation for a user's symptoms"""
        if not user_id or not symptoms or not symptoms.strip():
            raise ValidationError("User ID and symptoms are required")

        kind = ConsultationType.parse(consultation_type)

        try:
            context = await self.aggregator.build_context(user_id)
        except SQLAlchemyError as e:
            raise handle_database_error(e, "Failed to process AI consultation", "build medical context") from e

        prompt = build_prompt(symptoms, kind, context)
        answer = await ai_service.generate_consultation(prompt, symptoms)

        try:
            consultation = await self.consultation_repo.create({
                "user_id": user_id,
                "symptoms": symptoms,
                "consultation_type": kind.value,
                "prompt": prompt,
                "ai_response": answer.text,
                "confidence_score": answer.confidence,
            })
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise handle_database_error(e, "Failed to process AI consultation", "create consultation") from e

        logger.info(f"Created {kind.value} consultation {consultation.id} for user {user_id}")
        return consultation, context

    async def list_consultations(
        self,
        user_id: Optional[int],
        limit: int = settings.DEFAULT_CONSULTATIONS_LIMIT
    ) -> List[Consultation]:
        """Get a user's consultations, newest first"""
        if not user_id:
            raise ValidationError("User ID is required")

        try:
            return await self.consultation_repo.get_user_consultations(user_id, limit=limit)
        except SQLAlchemyError as e:
            raise handle_database_error(e, "Failed to fetch consultations", "list consultations") from e
