from wecare.domain.users.models import User
from wecare.domain.vitals.models import VitalSign
from wecare.domain.medications.models import Medication
from wecare.domain.records.models import MedicalRecord
from wecare.domain.consultations.models import Consultation, ConsultationType
