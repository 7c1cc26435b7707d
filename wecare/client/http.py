from typing import Optional, Any, Dict, List
import logging

import httpx

from wecare.core.config import settings
from wecare.core.exceptions import exception_from_status, handle_upstream_error

logger = logging.getLogger(__name__)


def _query_params(**params) -> Dict[str, str]:
    """Drop unset params and encode booleans the way the API parses them"""
    encoded = {}
    for name, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        encoded[name] = str(value)
    return encoded


class HealthApiClient:
    """Async client for the WeCare HTTP API.

    Error responses are raised as the matching custom exception with the
    server's message.
    """

    def __init__(
        self,
        base_url: str,
        api_prefix: str = settings.API_PREFIX,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/") + api_prefix,
            transport=transport,
            timeout=timeout,
        )

    async def __aenter__(self) -> "HealthApiClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, str]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        try:
            response = await self._client.request(method, path, params=params, json=json)
        except httpx.HTTPError as e:
            raise handle_upstream_error(e, "wecare-api", f"{method} {path}") from e

        if response.is_error:
            try:
                message = response.json().get("error") or response.reason_phrase
            except ValueError:
                message = response.reason_phrase
            logger.debug(f"{method} {path} failed with {response.status_code}: {message}")
            raise exception_from_status(response.status_code, message)

        return response.json()

    # Users

    async def list_users(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/users")

    async def get_user_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        return await self._request("GET", "/users", params={"email": email})

    async def create_user(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/users", json=payload)

    # Vital signs

    async def list_vital_signs(self, user_id: Any, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        return await self._request("GET", "/vital-signs", params=_query_params(userId=user_id, limit=limit))

    async def add_vital_signs(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/vital-signs", json=payload)

    # Medications

    async def list_medications(self, user_id: Any, is_active: Optional[bool] = None) -> List[Dict[str, Any]]:
        return await self._request("GET", "/medications", params=_query_params(userId=user_id, isActive=is_active))

    async def add_medication(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/medications", json=payload)

    # Consultations

    async def list_consultations(self, user_id: Any, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        return await self._request("GET", "/ai-consultation", params=_query_params(userId=user_id, limit=limit))

    async def request_consultation(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/ai-consultation", json=payload)
