from sqlalchemy import Column, String, Integer, Text, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime

from wecare.infrastructure.database import Base


class User(Base):
    """Health dashboard user profile"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)

    # Medical profile
    age = Column(Integer)
    gender = Column(String(50))
    blood_type = Column(String(10))
    allergies = Column(Text)
    chronic_conditions = Column(Text)
    emergency_contact = Column(Text)

    created_at = Column(DateTime, default=datetime.utcnow)

    vital_signs = relationship("VitalSign", back_populates="user", cascade="all, delete-orphan")
    medications = relationship("Medication", back_populates="user", cascade="all, delete-orphan")
    consultations = relationship("Consultation", back_populates="user", cascade="all, delete-orphan")
    medical_records = relationship("MedicalRecord", back_populates="user", cascade="all, delete-orphan")
