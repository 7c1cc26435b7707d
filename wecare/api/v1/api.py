from fastapi import APIRouter
from wecare.api.v1.users import routes as users
from wecare.api.v1.vitals import routes as vitals
from wecare.api.v1.medications import routes as medications
from wecare.api.v1.consultations import routes as consultations

api_router = APIRouter()
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(vitals.router, prefix="/vital-signs", tags=["vital-signs"])
api_router.include_router(medications.router, prefix="/medications", tags=["medications"])
api_router.include_router(consultations.router, prefix="/ai-consultation", tags=["ai-consultation"])
