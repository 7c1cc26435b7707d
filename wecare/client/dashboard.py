from contextlib import asynccontextmanager
from typing import Any, List, Optional, AsyncIterator
from datetime import datetime

import httpx
from pydantic import BaseModel

from wecare.client.cache import QueryCache
from wecare.client.http import HealthApiClient
from wecare.client.mutations import MutationCoordinator
from wecare.client.queries import HealthQueries

NOT_AVAILABLE = "N/A"
TREND_POINTS = 10


class DashboardSummary(BaseModel):
    """Headline metrics of the dashboard"""
    active_medications: int
    blood_pressure: str
    heart_rate: str
    consultations: int


class TrendPoint(BaseModel):
    """One reading on the vital signs chart"""
    date: str
    blood_pressure: Optional[int] = None
    heart_rate: Optional[int] = None
    weight: Optional[float] = None
    temperature: Optional[float] = None


class DashboardSession:
    """One user's view of the API: cached reads plus coordinated writes.

    Owns its API client and cache; both are closed with the session.
    """

    def __init__(self, user_id: Any, api: HealthApiClient, cache: QueryCache):
        self.user_id = user_id
        self.api = api
        self.cache = cache
        self.queries = HealthQueries(cache, api)
        self.mutations = MutationCoordinator(cache, api)

    @classmethod
    @asynccontextmanager
    async def open(
        cls,
        base_url: str,
        user_id: Any,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> AsyncIterator["DashboardSession"]:
        api = HealthApiClient(base_url, transport=transport)
        cache = QueryCache()
        try:
            yield cls(user_id, api, cache)
        finally:
            await cache.close()
            await api.close()

    async def summary(self) -> DashboardSummary:
        medications = await self.queries.medications(self.user_id)
        vitals = await self.queries.vital_signs(self.user_id)
        consultations = await self.queries.consultations(self.user_id)

        latest = vitals[0] if vitals else None
        return DashboardSummary(
            active_medications=len(medications),
            blood_pressure=(
                f"{latest['blood_pressure_systolic']}/{latest['blood_pressure_diastolic']}"
                if latest else NOT_AVAILABLE
            ),
            heart_rate=f"{latest['heart_rate']} bpm" if latest else NOT_AVAILABLE,
            consultations=len(consultations),
        )

    async def vitals_trend(self) -> List[TrendPoint]:
        """Latest readings, oldest first"""
        vitals = await self.queries.vital_signs(self.user_id)
        return [
            TrendPoint(
                date=datetime.fromisoformat(v["recorded_at"]).date().isoformat(),
                blood_pressure=v.get("blood_pressure_systolic"),
                heart_rate=v.get("heart_rate"),
                weight=v.get("weight"),
                temperature=v.get("temperature"),
            )
            for v in reversed(vitals[:TREND_POINTS])
        ]
