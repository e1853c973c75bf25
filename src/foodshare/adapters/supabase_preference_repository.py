"""Supabase implementation for food attributes and preferences."""

import logging
from dataclasses import dataclass

from supabase import Client

from foodshare.adapters.supabase_query import execute
from foodshare.domain.errors import DataIntegrityError
from foodshare.domain.models import (
    DEFAULT_IMPORTANCE,
    DonationAttribute,
    DonationAttributeDetail,
    FoodAttribute,
    PreferenceDetail,
    RecipientPreference,
)
from foodshare.services.preferences import PreferenceRepository

_logger = logging.getLogger(__name__)

_PREFERENCE_CONFLICT = "recipient_id,attribute_id"
_DONATION_ATTRIBUTE_CONFLICT = "donation_id,attribute_id"


@dataclass
class SupabasePreferenceRepository(PreferenceRepository):
    """Supabase-backed repository for the preference data model."""

    client: Client

    def create_food_attribute(
        self, name: str, category: str, description: str | None
    ) -> FoodAttribute:
        """Create a food attribute and return it."""
        rows = execute(
            self.client.table("food_attributes").insert(
                {"name": name, "category": category, "description": description}
            ),
            "food attribute insert",
        )
        if not rows:
            raise RuntimeError("Failed to create food attribute")
        return _parse_attribute(rows[0])

    def get_food_attributes(self, category: str | None = None) -> list[FoodAttribute]:
        """Return food attributes, optionally for one category."""
        query = self.client.table("food_attributes").select("*")
        if category:
            query = query.eq("category", category)
        rows = execute(query.order("id"), "food attribute list")
        return [_parse_attribute(row) for row in rows]

    def get_food_attribute(self, attribute_id: int) -> FoodAttribute | None:
        """Return a food attribute by id, if present."""
        rows = execute(
            self.client.table("food_attributes")
            .select("*")
            .eq("id", attribute_id)
            .limit(1),
            "food attribute lookup",
        )
        if not rows:
            return None
        return _parse_attribute(rows[0])

    def get_recipient_preferences(self, recipient_id: int) -> list[PreferenceDetail]:
        """Return preferences joined with their food attributes."""
        rows = execute(
            self.client.table("recipient_preferences")
            .select("recipient_id, attribute_id, importance, food_attributes(*)")
            .eq("recipient_id", recipient_id),
            "recipient preference list",
        )
        details = []
        for row in rows:
            preference = _parse_preference(row)
            attribute = _joined_attribute(
                row, "Recipient preference", recipient_id, preference.attribute_id
            )
            details.append(PreferenceDetail(preference=preference, attribute=attribute))
        return details

    def upsert_recipient_preference(
        self, recipient_id: int, attribute_id: int, importance: int | None = None
    ) -> RecipientPreference:
        """Create a preference, or update its importance in place."""
        table = self.client.table("recipient_preferences")
        payload = {
            "recipient_id": recipient_id,
            "attribute_id": attribute_id,
            "importance": DEFAULT_IMPORTANCE if importance is None else importance,
        }
        # Without an explicit importance an existing row must keep its value.
        rows = execute(
            table.upsert(
                payload,
                on_conflict=_PREFERENCE_CONFLICT,
                ignore_duplicates=importance is None,
            ),
            "recipient preference upsert",
        )
        if not rows:
            rows = execute(
                table.select("recipient_id, attribute_id, importance")
                .eq("recipient_id", recipient_id)
                .eq("attribute_id", attribute_id)
                .limit(1),
                "recipient preference lookup",
            )
        if not rows:
            raise RuntimeError("Failed to upsert recipient preference")
        return _parse_preference(rows[0])

    def update_recipient_preference(
        self, recipient_id: int, attribute_id: int, importance: int
    ) -> RecipientPreference | None:
        """Update an existing preference's importance."""
        rows = execute(
            self.client.table("recipient_preferences")
            .update({"importance": importance})
            .eq("recipient_id", recipient_id)
            .eq("attribute_id", attribute_id),
            "recipient preference update",
        )
        if not rows:
            return None
        return _parse_preference(rows[0])

    def get_donation_attributes(self, donation_id: int) -> list[DonationAttributeDetail]:
        """Return donation attributes joined with their food attributes."""
        rows = execute(
            self.client.table("donation_attributes")
            .select("donation_id, attribute_id, value, food_attributes(*)")
            .eq("donation_id", donation_id),
            "donation attribute list",
        )
        details = []
        for row in rows:
            tag = _parse_donation_attribute(row)
            attribute = _joined_attribute(
                row, "Donation attribute", donation_id, tag.attribute_id
            )
            details.append(
                DonationAttributeDetail(donation_attribute=tag, attribute=attribute)
            )
        return details

    def add_donation_attribute(
        self, donation_id: int, attribute_id: int, value: str | None = None
    ) -> DonationAttribute:
        """Attach an attribute to a donation, replacing any previous value."""
        rows = execute(
            self.client.table("donation_attributes").upsert(
                {
                    "donation_id": donation_id,
                    "attribute_id": attribute_id,
                    "value": value,
                },
                on_conflict=_DONATION_ATTRIBUTE_CONFLICT,
            ),
            "donation attribute upsert",
        )
        if not rows:
            raise RuntimeError("Failed to add donation attribute")
        return _parse_donation_attribute(rows[0])


def _joined_attribute(
    row: dict[str, object], association: str, owner_id: int, attribute_id: int
) -> FoodAttribute:
    embedded = row.get("food_attributes")
    if not isinstance(embedded, dict):
        _logger.warning(
            "%s references missing food attribute: owner_id=%s attribute_id=%s",
            association,
            owner_id,
            attribute_id,
        )
        raise DataIntegrityError(association, owner_id, attribute_id)
    return _parse_attribute(embedded)


def _parse_attribute(row: dict[str, object]) -> FoodAttribute:
    return FoodAttribute(
        id=int(row["id"]),
        name=str(row.get("name", "")),
        category=str(row.get("category", "")),
        description=row.get("description"),
    )


def _parse_preference(row: dict[str, object]) -> RecipientPreference:
    importance = row.get("importance")
    return RecipientPreference(
        recipient_id=int(row["recipient_id"]),
        attribute_id=int(row["attribute_id"]),
        importance=DEFAULT_IMPORTANCE if importance is None else int(importance),
    )


def _parse_donation_attribute(row: dict[str, object]) -> DonationAttribute:
    return DonationAttribute(
        donation_id=int(row["donation_id"]),
        attribute_id=int(row["attribute_id"]),
        value=row.get("value"),
    )
