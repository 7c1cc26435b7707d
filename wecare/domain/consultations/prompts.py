"""
Consultation prompt templates

One template per consultation type. Each embeds the patient context in a
fixed field order and ends with the same disclaimer.
"""

from typing import Optional, Callable, Dict

from wecare.domain.consultations.models import ConsultationType
from wecare.domain.consultations.context import MedicalContext, VitalsSnapshot

NONE_REPORTED = "None reported"
NO_MEDICATIONS = "None"
NO_VITALS = "None recorded"
UNKNOWN = "Unknown"

DISCLAIMER = (
    "IMPORTANT: This is for informational purposes only and should not "
    "replace professional medical advice."
)


def _or_default(value, default: str) -> str:
    if value is None or value == "":
        return default
    return str(value)


def _medications(context: MedicalContext) -> str:
    return ", ".join(context.current_medications) or NO_MEDICATIONS


def _vitals(vitals: Optional[VitalsSnapshot]) -> str:
    if vitals is None:
        return NO_VITALS
    return (
        f"BP: {vitals.blood_pressure_systolic}/{vitals.blood_pressure_diastolic}, "
        f"HR: {vitals.heart_rate}"
    )


def _demographics(context: MedicalContext) -> str:
    return f"- Age: {_or_default(context.age, UNKNOWN)}, Gender: {_or_default(context.gender, UNKNOWN)}"


def _medicine_suggestion_prompt(symptoms: str, context: MedicalContext) -> str:
    return f"""As a medical AI assistant, provide medicine suggestions for the following symptoms: "{symptoms}".

Patient Context:
{_demographics(context)}
- Blood Type: {_or_default(context.blood_type, UNKNOWN)}
- Allergies: {_or_default(context.allergies, NONE_REPORTED)}
- Chronic Conditions: {_or_default(context.chronic_conditions, NONE_REPORTED)}
- Current Medications: {_medications(context)}

Please provide:
1. Possible over-the-counter medications
2. Important warnings and contraindications
3. When to seek immediate medical attention
4. General care recommendations

{DISCLAIMER}"""


def _doctor_advice_prompt(symptoms: str, context: MedicalContext) -> str:
    return f"""As a medical AI assistant, provide doctor consultation advice for: "{symptoms}".

Patient Context:
{_demographics(context)}
- Medical History: {_or_default(context.chronic_conditions, NONE_REPORTED)}
- Current Medications: {_medications(context)}
- Recent Vitals: {_vitals(context.recent_vitals)}

Please advise:
1. Urgency level (Low/Medium/High/Emergency)
2. Recommended specialist type if needed
3. Questions to ask the doctor
4. Preparation for the appointment
5. Red flag symptoms to watch for

Seek immediate medical attention for emergencies.
{DISCLAIMER}"""


def _general_prompt(symptoms: str, context: MedicalContext) -> str:
    return f"""As a medical AI assistant, provide general health advice for: "{symptoms}".

Patient Context:
{_demographics(context)}
- Known Conditions: {_or_default(context.chronic_conditions, NONE_REPORTED)}

Please provide general health guidance, lifestyle recommendations, and when to seek medical care.

{DISCLAIMER}"""


TEMPLATES: Dict[ConsultationType, Callable[[str, MedicalContext], str]] = {
    ConsultationType.GENERAL: _general_prompt,
    ConsultationType.MEDICINE_SUGGESTION: _medicine_suggestion_prompt,
    ConsultationType.DOCTOR_ADVICE: _doctor_advice_prompt,
}


def build_prompt(symptoms: str, consultation_type, context: MedicalContext) -> str:
    """Render the prompt for a consultation.

    Unknown or missing consultation types use the general template.
    """
    template = TEMPLATES[ConsultationType.parse(consultation_type)]
    return template(symptoms, context)
