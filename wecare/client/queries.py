from typing import Any, Dict, List, Optional

from wecare.client.cache import QueryCache, CacheKey, EntityKind
from wecare.client.http import HealthApiClient

# Dashboard view defaults
VITAL_SIGNS_LIMIT = 30
CONSULTATIONS_LIMIT = 10


class HealthQueries:
    """Cached reads of the dashboard collections, one per entity kind"""

    def __init__(self, cache: QueryCache, api: HealthApiClient):
        self.cache = cache
        self.api = api

    @staticmethod
    def vital_signs_key(user_id: Any, limit: int = VITAL_SIGNS_LIMIT) -> CacheKey:
        return CacheKey.build(EntityKind.VITAL_SIGNS, user_id, limit=limit)

    @staticmethod
    def medications_key(user_id: Any, is_active: Optional[bool] = True) -> CacheKey:
        return CacheKey.build(EntityKind.MEDICATIONS, user_id, is_active=is_active)

    @staticmethod
    def consultations_key(user_id: Any, limit: int = CONSULTATIONS_LIMIT) -> CacheKey:
        return CacheKey.build(EntityKind.CONSULTATIONS, user_id, limit=limit)

    async def vital_signs(self, user_id: Any, limit: int = VITAL_SIGNS_LIMIT) -> List[Dict[str, Any]]:
        return await self.cache.get(
            self.vital_signs_key(user_id, limit),
            lambda: self.api.list_vital_signs(user_id, limit=limit),
        )

    async def medications(self, user_id: Any, is_active: Optional[bool] = True) -> List[Dict[str, Any]]:
        return await self.cache.get(
            self.medications_key(user_id, is_active),
            lambda: self.api.list_medications(user_id, is_active=is_active),
        )

    async def consultations(self, user_id: Any, limit: int = CONSULTATIONS_LIMIT) -> List[Dict[str, Any]]:
        return await self.cache.get(
            self.consultations_key(user_id, limit),
            lambda: self.api.list_consultations(user_id, limit=limit),
        )
