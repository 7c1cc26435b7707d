"""
Mutation coordinator

Runs writes against the API and, once a write is acknowledged, invalidates
the cached collections it affects. Failed writes leave the cache untouched
and propagate unchanged.
"""

from typing import Any, Dict, Optional
import asyncio
import enum
import logging

from wecare.client.cache import QueryCache, EntityKind
from wecare.client.http import HealthApiClient

logger = logging.getLogger(__name__)


class MutationKind(str, enum.Enum):
    ADD_VITAL_SIGNS = "add_vital_signs"
    ADD_MEDICATION = "add_medication"
    REQUEST_CONSULTATION = "request_consultation"


INVALIDATES = {
    MutationKind.ADD_VITAL_SIGNS: EntityKind.VITAL_SIGNS,
    MutationKind.ADD_MEDICATION: EntityKind.MEDICATIONS,
    MutationKind.REQUEST_CONSULTATION: EntityKind.CONSULTATIONS,
}


class MutationCoordinator:
    """Writes through the API and invalidates affected cache keys"""

    def __init__(self, cache: QueryCache, api: HealthApiClient):
        self.cache = cache
        self.api = api
        self._writers = {
            MutationKind.ADD_VITAL_SIGNS: api.add_vital_signs,
            MutationKind.ADD_MEDICATION: api.add_medication,
            MutationKind.REQUEST_CONSULTATION: api.request_consultation,
        }
        # Same-kind mutations run and invalidate in submission order
        self._locks = {kind: asyncio.Lock() for kind in EntityKind}

    async def mutate(self, kind: MutationKind, payload: Dict[str, Any]) -> Any:
        """Run one write; invalidate (kind, user) only after it succeeds"""
        kind = MutationKind(kind)
        entity = INVALIDATES[kind]

        async with self._locks[entity]:
            result = await self._writers[kind](payload)
            keys = self.cache.invalidate(entity, payload.get("user_id"))

        logger.debug(f"{kind.value} for user {payload.get('user_id')} invalidated {len(keys)} keys")
        return result

    async def add_vital_signs(self, user_id: Any, **vitals) -> Dict[str, Any]:
        return await self.mutate(MutationKind.ADD_VITAL_SIGNS, {"user_id": user_id, **vitals})

    async def add_medication(self, user_id: Any, medication_name: Optional[str], **fields) -> Dict[str, Any]:
        payload = {"user_id": user_id, "medication_name": medication_name, **fields}
        return await self.mutate(MutationKind.ADD_MEDICATION, payload)

    async def request_consultation(
        self,
        user_id: Any,
        symptoms: Optional[str],
        consultation_type: Optional[str] = None,
    ) -> Dict[str, Any]:
        payload = {"user_id": user_id, "symptoms": symptoms}
        if consultation_type is not None:
            payload["consultation_type"] = consultation_type
        return await self.mutate(MutationKind.REQUEST_CONSULTATION, payload)
