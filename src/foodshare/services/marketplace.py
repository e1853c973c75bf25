"""Storage interface for donations and recipients."""

from typing import Protocol

from foodshare.domain.models import Donation, Recipient


class MarketplaceRepository(Protocol):
    """Persistence interface for the entities that take part in matching."""

    def get_recipient(self, recipient_id: int) -> Recipient | None:
        """Return a recipient by id, if present."""

    def get_donation(self, donation_id: int) -> Donation | None:
        """Return a donation by id, if present."""

    def get_nearby_donations(
        self, latitude: float, longitude: float, radius_km: float
    ) -> list[Donation]:
        """Return available, located donations within the radius."""

    def get_nearby_recipients(
        self, latitude: float, longitude: float, radius_km: float
    ) -> list[Recipient]:
        """Return located recipients within the radius."""
