import pytest
from typing import AsyncGenerator
from datetime import datetime, timedelta
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker

from wecare.main import app
from wecare.infrastructure.database import get_db, Base, configure_sqlite
from wecare.client.http import HealthApiClient
from wecare.domain.users.models import User
from wecare.domain.users.repository import UserRepository
from wecare.domain.vitals.repository import VitalSignRepository
from wecare.domain.medications.repository import MedicationRepository
from wecare.domain.records.repository import MedicalRecordRepository
import wecare.models  # noqa: F401


@pytest.fixture(scope="function")
async def test_engine(tmp_path):
    """File-backed SQLite database, created fresh for each test."""
    engine = configure_sqlite(create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'wecare_test.db'}",
        connect_args={"check_same_thread": False},
    ))
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture(scope="function")
def session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture(scope="function")
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Session for seeding and inspecting the test database."""
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.close()


@pytest.fixture(scope="function")
def override_db(session_factory):
    """Route the app's database dependency to the test database."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    yield
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def transport(override_db) -> ASGITransport:
    return ASGITransport(app=app)


@pytest.fixture(scope="function")
async def client(transport: ASGITransport) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client against the app."""
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture(scope="function")
async def api(transport: ASGITransport) -> AsyncGenerator[HealthApiClient, None]:
    """Typed API client against the app."""
    async with HealthApiClient("http://test", transport=transport) as api_client:
        yield api_client


@pytest.fixture(scope="function")
async def test_user(db_session: AsyncSession) -> User:
    """A user with a minimal profile."""
    user = await UserRepository(db_session).create({
        "name": "Test User",
        "email": "test@example.com",
        "age": 34,
        "gender": "female",
    })
    # End the read transaction left open by the refresh
    await db_session.commit()
    return user


@pytest.fixture(scope="function")
async def other_user(db_session: AsyncSession) -> User:
    user = await UserRepository(db_session).create({
        "name": "Other User",
        "email": "other@example.com",
    })
    await db_session.commit()
    return user


@pytest.fixture(scope="function")
async def patient_history(db_session: AsyncSession, test_user: User) -> User:
    """Populate the test user's medications, vitals and medical history."""
    now = datetime.utcnow()

    medications = MedicationRepository(db_session)
    await medications.create({
        "user_id": test_user.id,
        "medication_name": "Lisinopril",
        "dosage": "10mg",
        "frequency": "daily",
    })
    await medications.create({
        "user_id": test_user.id,
        "medication_name": "Ibuprofen",
        "is_active": False,
    })

    vitals = VitalSignRepository(db_session)
    await vitals.create({
        "user_id": test_user.id,
        "blood_pressure_systolic": 130,
        "blood_pressure_diastolic": 85,
        "heart_rate": 80,
        "recorded_at": now - timedelta(days=1),
    })
    await vitals.create({
        "user_id": test_user.id,
        "blood_pressure_systolic": 120,
        "blood_pressure_diastolic": 80,
        "heart_rate": 72,
        "recorded_at": now,
    })

    records = MedicalRecordRepository(db_session)
    for day in range(5):
        await records.create({
            "user_id": test_user.id,
            "record_type": "symptom",
            "title": f"Symptom {day}",
            "date_recorded": now - timedelta(days=day),
        })
    await records.create({
        "user_id": test_user.id,
        "record_type": "diagnosis",
        "title": "Hypertension",
        "date_recorded": now + timedelta(hours=1),
    })
    await db_session.commit()

    return test_user


@pytest.fixture(scope="function")
def sample_vitals_data() -> dict:
    """Sample vital signs payload for testing."""
    return {
        "blood_pressure_systolic": 118,
        "blood_pressure_diastolic": 76,
        "heart_rate": 68,
        "temperature": 36.7,
        "weight": 64.5,
    }


@pytest.fixture(scope="function")
def sample_medication_data() -> dict:
    """Sample medication payload for testing."""
    return {
        "medication_name": "Metformin",
        "dosage": "500mg",
        "frequency": "twice daily",
        "start_date": "2024-01-01",
        "prescribed_by": "Dr. Smith",
    }


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
    config.addinivalue_line(
        "markers", "cache: mark test as query cache related"
    )
    config.addinivalue_line(
        "markers", "consultations: mark test as AI consultation related"
    )
