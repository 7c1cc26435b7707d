from sqlalchemy import Column, String, Integer, Text, Float, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
import enum

from wecare.infrastructure.database import Base


class ConsultationType(str, enum.Enum):
    """Consultation type enumeration"""
    GENERAL = "general"
    MEDICINE_SUGGESTION = "medicine_suggestion"
    DOCTOR_ADVICE = "doctor_advice"

    @classmethod
    def parse(cls, value) -> "ConsultationType":
        """Resolve a raw value, falling back to GENERAL when unrecognized"""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.GENERAL


class Consultation(Base):
    """Append-only record of one symptoms-to-AI-response exchange"""
    __tablename__ = "ai_consultations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    symptoms = Column(Text, nullable=False)
    consultation_type = Column(String(50), nullable=False, default=ConsultationType.GENERAL.value)
    prompt = Column(Text, nullable=False)
    ai_response = Column(Text, nullable=False)
    confidence_score = Column(Float)  # 0-1

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    user = relationship("User", back_populates="consultations")
