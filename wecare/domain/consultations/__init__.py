# AI consultation domain module
from wecare.domain.consultations.models import Consultation, ConsultationType
from wecare.domain.consultations.context import ContextAggregator, MedicalContext
from wecare.domain.consultations.prompts import build_prompt

__all__ = [
    "Consultation",
    "ConsultationType",
    "ContextAggregator",
    "MedicalContext",
    "build_prompt",
]
