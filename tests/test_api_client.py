import httpx
import pytest

from wecare.core.exceptions import (
    ValidationError, NotFoundError, PersistenceError, UpstreamError, exception_from_status
)
from wecare.client.http import HealthApiClient, _query_params
from wecare.domain.users.models import User


@pytest.mark.unit
class TestErrorMapping:

    @pytest.mark.parametrize(
        "status_code, exception_class",
        [
            (400, ValidationError),
            (404, NotFoundError),
            (500, PersistenceError),
            (502, PersistenceError),
        ],
    )
    def test_exception_from_status(self, status_code, exception_class):
        exception = exception_from_status(status_code, "boom")

        assert isinstance(exception, exception_class)
        assert exception.message == "boom"
        assert exception.status_code == status_code

    def test_query_params(self):
        assert _query_params(userId=3, isActive=False, limit=None) == {"userId": "3", "isActive": "false"}

    async def test_transport_failure_is_upstream_error(self):
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with HealthApiClient("http://test", transport=httpx.MockTransport(refuse)) as api:
            with pytest.raises(UpstreamError):
                await api.list_users()

    async def test_error_body_without_json(self):
        def broken(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, text="oops")

        async with HealthApiClient("http://test", transport=httpx.MockTransport(broken)) as api:
            with pytest.raises(PersistenceError) as exc_info:
                await api.list_users()

        assert exc_info.value.message == "Internal Server Error"


@pytest.mark.integration
class TestHealthApiClient:

    async def test_user_round_trip(self, api: HealthApiClient):
        created = await api.create_user({"name": "Sam", "email": "sam@example.com"})

        assert (await api.get_user_by_email("sam@example.com"))["id"] == created["id"]
        assert await api.get_user_by_email("nobody@example.com") is None
        assert [u["id"] for u in await api.list_users()] == [created["id"]]

    async def test_missing_fields_raise_validation_error(self, api: HealthApiClient):
        with pytest.raises(ValidationError) as exc_info:
            await api.create_user({"name": "Sam"})

        assert exc_info.value.message == "Name and email are required"

    async def test_medications_filter(self, api: HealthApiClient, patient_history: User):
        active = await api.list_medications(patient_history.id, is_active=True)
        everything = await api.list_medications(patient_history.id)

        assert [m["medication_name"] for m in active] == ["Lisinopril"]
        assert len(everything) == 2
