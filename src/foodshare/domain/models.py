"""Domain models for the donation marketplace."""

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Generic, TypeVar

DEFAULT_IMPORTANCE = 5
MIN_IMPORTANCE = 0
MAX_IMPORTANCE = 5


class DonationStatus:
    """Known donation lifecycle tags."""

    AVAILABLE = "available"
    CLAIMED = "claimed"
    COMPLETED = "completed"


@dataclass(frozen=True)
class Coordinate:
    """A latitude/longitude pair in degrees."""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class FoodAttribute:
    """Reference data describing a food trait such as "vegetarian"."""

    id: int
    name: str
    category: str
    description: str | None = None


@dataclass(frozen=True)
class DonationAttribute:
    """Attribute tag attached to a donation."""

    donation_id: int
    attribute_id: int
    value: str | None = None


@dataclass(frozen=True)
class RecipientPreference:
    """Importance a recipient assigns to a food attribute."""

    recipient_id: int
    attribute_id: int
    importance: int = DEFAULT_IMPORTANCE


@dataclass(frozen=True)
class PreferenceDetail:
    """A recipient preference joined with its food attribute."""

    preference: RecipientPreference
    attribute: FoodAttribute

    @property
    def attribute_id(self) -> int:
        return self.preference.attribute_id

    @property
    def importance(self) -> int:
        return self.preference.importance


@dataclass(frozen=True)
class DonationAttributeDetail:
    """A donation attribute joined with its food attribute."""

    donation_attribute: DonationAttribute
    attribute: FoodAttribute

    @property
    def attribute_id(self) -> int:
        return self.donation_attribute.attribute_id

    @property
    def value(self) -> str | None:
        return self.donation_attribute.value


@dataclass(frozen=True)
class Donation:
    """A food donation listed by a donor."""

    id: int
    donor_id: int
    title: str
    status: str
    latitude: float | None = None
    longitude: float | None = None
    food_type: str | None = None
    quantity: str | None = None
    expiry_date: datetime | None = None
    recipient_id: int | None = None

    @property
    def coordinate(self) -> Coordinate | None:
        if self.latitude is None or self.longitude is None:
            return None
        return Coordinate(self.latitude, self.longitude)


@dataclass(frozen=True)
class Recipient:
    """An organization that receives donations."""

    id: int
    name: str
    latitude: float | None = None
    longitude: float | None = None
    organization_type: str | None = None
    verification_status: str = "pending"

    @property
    def coordinate(self) -> Coordinate | None:
        if self.latitude is None or self.longitude is None:
            return None
        return Coordinate(self.latitude, self.longitude)


EntityT = TypeVar("EntityT", Donation, Recipient)


@dataclass(frozen=True)
class MatchResult(Generic[EntityT]):
    """A candidate entity annotated with its match score."""

    entity: EntityT
    match_score: int

    def to_dict(self) -> dict[str, object]:
        """Return the entity fields plus ``matchScore``, JSON friendly."""
        payload = asdict(self.entity)
        expiry = payload.get("expiry_date")
        if isinstance(expiry, datetime):
            payload["expiry_date"] = expiry.isoformat()
        payload["matchScore"] = self.match_score
        return payload
