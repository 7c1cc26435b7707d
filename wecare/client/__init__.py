# Client-side data layer: cached reads and coordinated writes
from wecare.client.cache import QueryCache, CacheKey, CacheEntry, EntityKind
from wecare.client.http import HealthApiClient
from wecare.client.queries import HealthQueries
from wecare.client.mutations import MutationCoordinator, MutationKind
from wecare.client.dashboard import DashboardSession, DashboardSummary, TrendPoint

__all__ = [
    "QueryCache",
    "CacheKey",
    "CacheEntry",
    "EntityKind",
    "HealthApiClient",
    "HealthQueries",
    "MutationCoordinator",
    "MutationKind",
    "DashboardSession",
    "DashboardSummary",
    "TrendPoint",
]
