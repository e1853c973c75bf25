"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from foodshare.adapters.in_memory_store import InMemoryMarketplaceStore
from foodshare.adapters.supabase_marketplace_repository import (
    SupabaseMarketplaceRepository,
)
from foodshare.adapters.supabase_preference_repository import (
    SupabasePreferenceRepository,
)
from foodshare.config import Settings
from foodshare.services.marketplace import MarketplaceRepository
from foodshare.services.matching import MatchingService
from foodshare.services.preferences import PreferenceRepository, PreferenceService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    preference_service: PreferenceService
    matching_service: MatchingService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    marketplace, preferences = _build_repositories(resolved_settings)
    preference_service = PreferenceService(
        repository=preferences, marketplace=marketplace
    )
    matching_service = MatchingService(
        marketplace=marketplace,
        preferences=preference_service,
        default_radius_km=resolved_settings.default_radius_km,
    )
    return AppContainer(
        settings=resolved_settings,
        preference_service=preference_service,
        matching_service=matching_service,
    )


def _build_repositories(
    settings: Settings,
) -> tuple[MarketplaceRepository, PreferenceRepository]:
    if settings.storage_backend == "memory":
        store = InMemoryMarketplaceStore()
        return store, store
    if not settings.supabase_url or not settings.supabase_service_key:
        raise ValueError(
            "Supabase backend requires SUPABASE_URL and SUPABASE_SERVICE_KEY"
        )
    client = create_client(settings.supabase_url, settings.supabase_service_key)
    return SupabaseMarketplaceRepository(client), SupabasePreferenceRepository(client)
