"""Services for food attributes, donation tags and recipient preferences."""

import logging
from dataclasses import dataclass
from typing import Protocol

from foodshare.domain.errors import InvalidRequestError, NotFoundError
from foodshare.domain.models import (
    MAX_IMPORTANCE,
    MIN_IMPORTANCE,
    DonationAttribute,
    DonationAttributeDetail,
    FoodAttribute,
    PreferenceDetail,
    RecipientPreference,
)
from foodshare.services.marketplace import MarketplaceRepository

_logger = logging.getLogger(__name__)


class PreferenceRepository(Protocol):
    """Persistence interface for attributes and their associations."""

    def create_food_attribute(
        self, name: str, category: str, description: str | None
    ) -> FoodAttribute:
        """Create a food attribute and return it."""

    def get_food_attributes(self, category: str | None = None) -> list[FoodAttribute]:
        """Return food attributes, optionally limited to one category."""

    def get_food_attribute(self, attribute_id: int) -> FoodAttribute | None:
        """Return a food attribute by id, if present."""

    def get_recipient_preferences(self, recipient_id: int) -> list[PreferenceDetail]:
        """Return a recipient's preferences joined with their attributes."""

    def upsert_recipient_preference(
        self, recipient_id: int, attribute_id: int, importance: int | None = None
    ) -> RecipientPreference:
        """Create a preference, or update its importance in place."""

    def update_recipient_preference(
        self, recipient_id: int, attribute_id: int, importance: int
    ) -> RecipientPreference | None:
        """Update an existing preference, returning None when it is absent."""

    def get_donation_attributes(self, donation_id: int) -> list[DonationAttributeDetail]:
        """Return a donation's attributes joined with their food attributes."""

    def add_donation_attribute(
        self, donation_id: int, attribute_id: int, value: str | None = None
    ) -> DonationAttribute:
        """Attach an attribute to a donation."""


@dataclass
class PreferenceService:
    """Application service for the preference data model."""

    repository: PreferenceRepository
    marketplace: MarketplaceRepository

    def get_attributes(self, category: str | None = None) -> list[FoodAttribute]:
        """Return all food attributes, or those in ``category``."""
        return self.repository.get_food_attributes(category)

    def create_attribute(
        self, name: str, category: str, description: str | None = None
    ) -> FoodAttribute:
        """Create a new food attribute."""
        if not name.strip():
            raise InvalidRequestError("Attribute name must not be empty")
        attribute = self.repository.create_food_attribute(
            name.strip(), category.strip(), description
        )
        _logger.info(
            "Food attribute created: id=%s name=%s category=%s",
            attribute.id,
            attribute.name,
            attribute.category,
        )
        return attribute

    def get_recipient_preferences(self, recipient_id: int) -> list[PreferenceDetail]:
        """Return a recipient's preferences; empty when none are recorded."""
        return self.repository.get_recipient_preferences(recipient_id)

    def upsert_recipient_preference(
        self, recipient_id: int, attribute_id: int, importance: int | None = None
    ) -> RecipientPreference:
        """Create or update the importance a recipient gives an attribute."""
        if importance is not None:
            _validate_importance(importance)
        self._require_recipient(recipient_id)
        self._require_attribute(attribute_id)
        return self.repository.upsert_recipient_preference(
            recipient_id, attribute_id, importance
        )

    def update_recipient_preference(
        self, recipient_id: int, attribute_id: int, importance: int
    ) -> RecipientPreference:
        """Update an existing preference's importance."""
        _validate_importance(importance)
        updated = self.repository.update_recipient_preference(
            recipient_id, attribute_id, importance
        )
        if updated is None:
            raise NotFoundError("Preference", (recipient_id, attribute_id))
        return updated

    def get_donation_attributes(self, donation_id: int) -> list[DonationAttributeDetail]:
        """Return a donation's attributes."""
        return self.repository.get_donation_attributes(donation_id)

    def add_donation_attribute(
        self, donation_id: int, attribute_id: int, value: str | None = None
    ) -> DonationAttribute:
        """Tag a donation with a food attribute."""
        if self.marketplace.get_donation(donation_id) is None:
            raise NotFoundError("Donation", donation_id)
        self._require_attribute(attribute_id)
        return self.repository.add_donation_attribute(donation_id, attribute_id, value)

    def _require_recipient(self, recipient_id: int) -> None:
        if self.marketplace.get_recipient(recipient_id) is None:
            raise NotFoundError("Recipient", recipient_id)

    def _require_attribute(self, attribute_id: int) -> None:
        if self.repository.get_food_attribute(attribute_id) is None:
            raise NotFoundError("Food attribute", attribute_id)


def _validate_importance(importance: int) -> None:
    if not MIN_IMPORTANCE <= importance <= MAX_IMPORTANCE:
        raise InvalidRequestError(
            f"Importance must be between {MIN_IMPORTANCE} and {MAX_IMPORTANCE}"
        )
