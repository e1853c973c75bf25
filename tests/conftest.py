"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

import pytest

from foodshare.adapters.in_memory_store import InMemoryMarketplaceStore
from foodshare.config import Settings
from foodshare.containers import AppContainer
from foodshare.domain.models import Donation, DonationStatus, Recipient
from foodshare.services.matching import MatchingService
from foodshare.services.preferences import PreferenceService

SRM = (12.8230, 80.0444)
SARAVANA = (12.8231, 80.0442)
FIFTEEN_KM_NORTH = (12.9579, 80.0444)


def make_recipient(
    recipient_id: int, location: tuple[float, float] | None = SRM
) -> Recipient:
    latitude, longitude = location if location else (None, None)
    return Recipient(
        id=recipient_id,
        name=f"Food Bank {recipient_id}",
        latitude=latitude,
        longitude=longitude,
        organization_type="food_bank",
    )


def make_donation(
    donation_id: int,
    location: tuple[float, float] | None = SARAVANA,
    status: str = DonationStatus.AVAILABLE,
) -> Donation:
    latitude, longitude = location if location else (None, None)
    return Donation(
        id=donation_id,
        donor_id=100 + donation_id,
        title=f"Donation {donation_id}",
        status=status,
        latitude=latitude,
        longitude=longitude,
        food_type="Vegetarian",
        quantity="10 servings",
        expiry_date=datetime.now(tz=UTC) + timedelta(hours=6),
    )


@dataclass
class CountingMarketplace:
    """Wraps a store and records which nearby queries were issued."""

    store: InMemoryMarketplaceStore
    nearby_calls: list[tuple[str, float]] = field(default_factory=list)

    def get_recipient(self, recipient_id: int) -> Recipient | None:
        return self.store.get_recipient(recipient_id)

    def get_donation(self, donation_id: int) -> Donation | None:
        return self.store.get_donation(donation_id)

    def get_nearby_donations(
        self, latitude: float, longitude: float, radius_km: float
    ) -> list[Donation]:
        self.nearby_calls.append(("donations", radius_km))
        # Return everything so the service has to enforce the radius itself.
        return list(self.store.donations.values())

    def get_nearby_recipients(
        self, latitude: float, longitude: float, radius_km: float
    ) -> list[Recipient]:
        self.nearby_calls.append(("recipients", radius_km))
        return list(self.store.recipients.values())


@pytest.fixture
def settings() -> Settings:
    return Settings(
        admin_token="admin-token",
        storage_backend="memory",
    )


@pytest.fixture
def store() -> InMemoryMarketplaceStore:
    return InMemoryMarketplaceStore()


@pytest.fixture
def preference_service(store: InMemoryMarketplaceStore) -> PreferenceService:
    return PreferenceService(repository=store, marketplace=store)


@pytest.fixture
def matching_service(
    store: InMemoryMarketplaceStore, preference_service: PreferenceService
) -> MatchingService:
    return MatchingService(marketplace=store, preferences=preference_service)


@pytest.fixture
def container(
    settings: Settings,
    preference_service: PreferenceService,
    matching_service: MatchingService,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        preference_service=preference_service,
        matching_service=matching_service,
    )
