import pytest
from httpx import AsyncClient
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from wecare.core.config import settings
from wecare.core.exceptions import UpstreamError
from wecare.domain.users.models import User
from wecare.domain.consultations.models import Consultation
from wecare.domain.consultations.prompts import DISCLAIMER
from wecare.services import ai_service


async def count_consultations(db: AsyncSession) -> int:
    result = await db.execute(select(func.count(Consultation.id)))
    return result.scalar_one()


@pytest.fixture(autouse=True)
def no_ai_model(monkeypatch):
    """Run consultations against the placeholder unless a test configures a model."""
    monkeypatch.setattr(settings, "GEMINI_API_KEY", None)


@pytest.mark.integration
@pytest.mark.consultations
class TestConsultationEndpoints:
    """Test /api/ai-consultation"""

    async def test_request_consultation(self, client: AsyncClient, test_user: User):
        response = await client.post("/api/ai-consultation", json={
            "user_id": test_user.id,
            "symptoms": "mild headache",
        })

        assert response.status_code == 200
        data = response.json()
        consultation = data["consultation"]
        assert consultation["user_id"] == test_user.id
        assert consultation["symptoms"] == "mild headache"
        assert consultation["consultation_type"] == "general"
        assert "- Known Conditions: None reported" in consultation["prompt"]
        assert DISCLAIMER in consultation["prompt"]
        assert consultation["ai_response"].startswith("[AI Response Placeholder")
        assert 'Based on your symptoms: "mild headache"' in consultation["ai_response"]
        assert consultation["confidence_score"] == pytest.approx(0.85)

    async def test_medical_context_in_response(self, client: AsyncClient, patient_history: User):
        """Test that the context used for the prompt is returned with camelCase keys"""
        response = await client.post("/api/ai-consultation", json={
            "user_id": patient_history.id,
            "symptoms": "dizziness",
            "consultation_type": "doctor_advice",
        })

        assert response.status_code == 200
        context = response.json()["medicalContext"]
        assert context["age"] == 34
        assert context["bloodType"] is None
        assert context["currentMedications"] == ["Lisinopril 10mg daily"]
        assert context["recentVitals"]["heart_rate"] == 72
        assert len(context["recentSymptoms"]) == 3
        assert "- Recent Vitals: BP: 120/80, HR: 72" in response.json()["consultation"]["prompt"]

    async def test_unknown_type_stored_as_general(self, client: AsyncClient, test_user: User):
        response = await client.post("/api/ai-consultation", json={
            "user_id": test_user.id,
            "symptoms": "cough",
            "consultation_type": "second_opinion",
        })

        assert response.status_code == 200
        assert response.json()["consultation"]["consultation_type"] == "general"

    @pytest.mark.parametrize(
        "payload",
        [
            {"symptoms": "cough"},
            {"user_id": 1},
            {"user_id": 1, "symptoms": ""},
            {"user_id": 1, "symptoms": "   "},
        ],
    )
    async def test_missing_fields(self, client: AsyncClient, db_session: AsyncSession, test_user: User, payload):
        """Test that incomplete requests are rejected and nothing is stored"""
        response = await client.post("/api/ai-consultation", json=payload)

        assert response.status_code == 400
        assert response.json() == {"error": "User ID and symptoms are required"}
        assert await count_consultations(db_session) == 0

    async def test_unknown_user(self, client: AsyncClient, db_session: AsyncSession):
        response = await client.post("/api/ai-consultation", json={"user_id": 424242, "symptoms": "cough"})

        assert response.status_code == 404
        assert response.json() == {"error": "User not found"}
        assert await count_consultations(db_session) == 0

    async def test_list_requires_user(self, client: AsyncClient):
        response = await client.get("/api/ai-consultation")

        assert response.status_code == 400
        assert response.json() == {"error": "User ID is required"}

    async def test_list_newest_first(self, client: AsyncClient, test_user: User):
        for symptoms in ("cough", "fever", "rash"):
            await client.post("/api/ai-consultation", json={"user_id": test_user.id, "symptoms": symptoms})

        response = await client.get("/api/ai-consultation", params={"userId": test_user.id, "limit": 2})

        assert response.status_code == 200
        assert [c["symptoms"] for c in response.json()] == ["rash", "fever"]

    async def test_consultations_are_append_only(self, client: AsyncClient, test_user: User):
        """Test that repeating a request records a second consultation"""
        payload = {"user_id": test_user.id, "symptoms": "cough"}
        first = await client.post("/api/ai-consultation", json=payload)
        second = await client.post("/api/ai-consultation", json=payload)

        assert first.json()["consultation"]["id"] != second.json()["consultation"]["id"]

        response = await client.get("/api/ai-consultation", params={"userId": test_user.id})
        assert len(response.json()) == 2


@pytest.mark.consultations
class TestAIGeneration:

    async def test_model_answer_is_stored(self, monkeypatch, client: AsyncClient, test_user: User):
        prompts = []

        async def fake_generate_content(prompt: str) -> str:
            prompts.append(prompt)
            return "Rest and stay hydrated."

        monkeypatch.setattr(settings, "GEMINI_API_KEY", "test-key")
        monkeypatch.setattr(ai_service, "generate_content", fake_generate_content)

        response = await client.post("/api/ai-consultation", json={"user_id": test_user.id, "symptoms": "fatigue"})

        consultation = response.json()["consultation"]
        assert consultation["ai_response"] == "Rest and stay hydrated."
        assert consultation["confidence_score"] == pytest.approx(0.85)
        assert prompts == [consultation["prompt"]]

    async def test_model_failure_degrades(self, monkeypatch, client: AsyncClient, test_user: User):
        """Test that a failing model still records a placeholder consultation"""

        async def failing_generate_content(prompt: str) -> str:
            raise UpstreamError("External service gemini unavailable")

        monkeypatch.setattr(settings, "GEMINI_API_KEY", "test-key")
        monkeypatch.setattr(ai_service, "generate_content", failing_generate_content)

        response = await client.post("/api/ai-consultation", json={"user_id": test_user.id, "symptoms": "fatigue"})

        assert response.status_code == 200
        consultation = response.json()["consultation"]
        assert consultation["ai_response"] == ai_service.placeholder_response("fatigue")
        assert consultation["confidence_score"] == 0.0

    async def test_generate_content_wraps_errors(self, monkeypatch):
        class BrokenModel:
            def __init__(self, name):
                self.name = name

            async def generate_content_async(self, prompt):
                raise RuntimeError("quota exceeded")

        monkeypatch.setattr(ai_service.genai, "GenerativeModel", BrokenModel)

        with pytest.raises(UpstreamError) as exc_info:
            await ai_service.generate_content("prompt")

        assert exc_info.value.status_code == 503
        assert exc_info.value.details["original_error"] == "quota exceeded"
