from sqlalchemy import Column, String, Integer, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime

from wecare.infrastructure.database import Base


SYMPTOM_RECORD_TYPE = "symptom"


class MedicalRecord(Base):
    """Entry in a user's medical history (symptoms, diagnoses, visits)"""
    __tablename__ = "medical_records"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    record_type = Column(String(50), nullable=False)
    title = Column(String(255))
    description = Column(Text)
    date_recorded = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="medical_records")
