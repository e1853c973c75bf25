"""In-memory storage backend for local runs and tests."""

import logging
import threading
from dataclasses import dataclass, field, replace

from foodshare.domain.errors import DataIntegrityError
from foodshare.domain.models import (
    DEFAULT_IMPORTANCE,
    Coordinate,
    Donation,
    DonationAttribute,
    DonationAttributeDetail,
    FoodAttribute,
    PreferenceDetail,
    Recipient,
    RecipientPreference,
)
from foodshare.services.marketplace import MarketplaceRepository
from foodshare.services.preferences import PreferenceRepository
from foodshare.services.proximity import find_within_radius, is_available

_logger = logging.getLogger(__name__)


@dataclass
class InMemoryMarketplaceStore(MarketplaceRepository, PreferenceRepository):
    """Dict-backed store; associations are keyed by (owner id, attribute id)."""

    recipients: dict[int, Recipient] = field(default_factory=dict)
    donations: dict[int, Donation] = field(default_factory=dict)
    food_attributes: dict[int, FoodAttribute] = field(default_factory=dict)
    donation_attributes: dict[tuple[int, int], DonationAttribute] = field(
        default_factory=dict
    )
    recipient_preferences: dict[tuple[int, int], RecipientPreference] = field(
        default_factory=dict
    )
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)
    _next_attribute_id: int = 1

    def save_recipient(self, recipient: Recipient) -> Recipient:
        """Insert or replace a recipient."""
        with self._lock:
            self.recipients[recipient.id] = recipient
        return recipient

    def save_donation(self, donation: Donation) -> Donation:
        """Insert or replace a donation."""
        with self._lock:
            self.donations[donation.id] = donation
        return donation

    def get_recipient(self, recipient_id: int) -> Recipient | None:
        return self.recipients.get(recipient_id)

    def get_donation(self, donation_id: int) -> Donation | None:
        return self.donations.get(donation_id)

    def get_nearby_donations(
        self, latitude: float, longitude: float, radius_km: float
    ) -> list[Donation]:
        return find_within_radius(
            Coordinate(latitude, longitude),
            radius_km,
            list(self.donations.values()),
            keep=is_available,
        )

    def get_nearby_recipients(
        self, latitude: float, longitude: float, radius_km: float
    ) -> list[Recipient]:
        return find_within_radius(
            Coordinate(latitude, longitude),
            radius_km,
            list(self.recipients.values()),
        )

    def create_food_attribute(
        self, name: str, category: str, description: str | None
    ) -> FoodAttribute:
        with self._lock:
            while self._next_attribute_id in self.food_attributes:
                self._next_attribute_id += 1
            attribute = FoodAttribute(
                id=self._next_attribute_id,
                name=name,
                category=category,
                description=description,
            )
            self.food_attributes[attribute.id] = attribute
            self._next_attribute_id += 1
        return attribute

    def get_food_attributes(self, category: str | None = None) -> list[FoodAttribute]:
        attributes = list(self.food_attributes.values())
        if category:
            attributes = [attr for attr in attributes if attr.category == category]
        return attributes

    def get_food_attribute(self, attribute_id: int) -> FoodAttribute | None:
        return self.food_attributes.get(attribute_id)

    def get_recipient_preferences(self, recipient_id: int) -> list[PreferenceDetail]:
        preferences = [
            pref
            for (owner_id, _), pref in list(self.recipient_preferences.items())
            if owner_id == recipient_id
        ]
        return [
            PreferenceDetail(
                preference=pref,
                attribute=self._resolve("Recipient preference", recipient_id, pref),
            )
            for pref in preferences
        ]

    def upsert_recipient_preference(
        self, recipient_id: int, attribute_id: int, importance: int | None = None
    ) -> RecipientPreference:
        key = (recipient_id, attribute_id)
        with self._lock:
            existing = self.recipient_preferences.get(key)
            if existing is None:
                preference = RecipientPreference(
                    recipient_id=recipient_id,
                    attribute_id=attribute_id,
                    importance=DEFAULT_IMPORTANCE if importance is None else importance,
                )
            elif importance is None:
                return existing
            else:
                preference = replace(existing, importance=importance)
            self.recipient_preferences[key] = preference
        return preference

    def update_recipient_preference(
        self, recipient_id: int, attribute_id: int, importance: int
    ) -> RecipientPreference | None:
        key = (recipient_id, attribute_id)
        with self._lock:
            existing = self.recipient_preferences.get(key)
            if existing is None:
                return None
            updated = replace(existing, importance=importance)
            self.recipient_preferences[key] = updated
        return updated

    def get_donation_attributes(self, donation_id: int) -> list[DonationAttributeDetail]:
        tags = [
            tag
            for (owner_id, _), tag in list(self.donation_attributes.items())
            if owner_id == donation_id
        ]
        return [
            DonationAttributeDetail(
                donation_attribute=tag,
                attribute=self._resolve("Donation attribute", donation_id, tag),
            )
            for tag in tags
        ]

    def add_donation_attribute(
        self, donation_id: int, attribute_id: int, value: str | None = None
    ) -> DonationAttribute:
        tag = DonationAttribute(
            donation_id=donation_id, attribute_id=attribute_id, value=value
        )
        with self._lock:
            self.donation_attributes[(donation_id, attribute_id)] = tag
        return tag

    def _resolve(
        self,
        association: str,
        owner_id: int,
        link: RecipientPreference | DonationAttribute,
    ) -> FoodAttribute:
        attribute = self.food_attributes.get(link.attribute_id)
        if attribute is None:
            _logger.warning(
                "%s references missing food attribute: owner_id=%s attribute_id=%s",
                association,
                owner_id,
                link.attribute_id,
            )
            raise DataIntegrityError(association, owner_id, link.attribute_id)
        return attribute
