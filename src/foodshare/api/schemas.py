"""Pydantic models for API request payloads."""

from pydantic import BaseModel, Field

from foodshare.domain.models import MAX_IMPORTANCE, MIN_IMPORTANCE


class FoodAttributeCreate(BaseModel):
    """Payload for creating a food attribute."""

    name: str = Field(min_length=1)
    category: str = Field(min_length=1)
    description: str | None = None


class PreferenceUpsert(BaseModel):
    """Payload for creating or updating a recipient preference."""

    attribute_id: int
    importance: int | None = Field(default=None, ge=MIN_IMPORTANCE, le=MAX_IMPORTANCE)


class PreferenceUpdate(BaseModel):
    """Payload for changing an existing preference's importance."""

    importance: int = Field(ge=MIN_IMPORTANCE, le=MAX_IMPORTANCE)


class DonationAttributeCreate(BaseModel):
    """Payload for tagging a donation with an attribute."""

    attribute_id: int
    value: str | None = None
