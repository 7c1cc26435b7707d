from sqlalchemy import Column, String, Integer, Text, Date, DateTime, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime

from wecare.infrastructure.database import Base


class Medication(Base):
    """Medication taken by a user"""
    __tablename__ = "medications"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    medication_name = Column(String(255), nullable=False)
    dosage = Column(String(100))
    frequency = Column(String(100))
    start_date = Column(Date)
    end_date = Column(Date)
    prescribed_by = Column(String(200))
    notes = Column(Text)
    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)

    user = relationship("User", back_populates="medications")

    def describe(self) -> str:
        """Render as "<name> <dosage> <frequency>", skipping missing parts.

        >>> Medication(medication_name="Lisinopril", dosage="10mg", frequency="daily").describe()
        'Lisinopril 10mg daily'
        >>> Medication(medication_name="Lisinopril", frequency="daily").describe()
        'Lisinopril daily'

        A missing part is left out rather than rendered as "None".
        """
        parts = (self.medication_name, self.dosage, self.frequency)
        return " ".join(part for part in parts if part)
