from sqlalchemy import Column, Integer, Float, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime

from wecare.infrastructure.database import Base


class VitalSign(Base):
    """One timestamped set of vital sign measurements"""
    __tablename__ = "vital_signs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # Blood Pressure
    blood_pressure_systolic = Column(Integer)  # mmHg
    blood_pressure_diastolic = Column(Integer)  # mmHg

    heart_rate = Column(Integer)  # bpm
    temperature = Column(Float)
    weight = Column(Float)
    height = Column(Float)
    blood_sugar = Column(Float)

    recorded_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    user = relationship("User", back_populates="vital_signs")
