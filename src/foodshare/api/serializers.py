"""JSON serialization for domain models."""

from dataclasses import asdict

from foodshare.domain.models import (
    Donation,
    DonationAttribute,
    DonationAttributeDetail,
    FoodAttribute,
    MatchResult,
    PreferenceDetail,
    Recipient,
    RecipientPreference,
)


def serialize_attribute(attribute: FoodAttribute) -> dict[str, object]:
    return asdict(attribute)


def serialize_preference(preference: RecipientPreference) -> dict[str, object]:
    return asdict(preference)


def serialize_preference_detail(detail: PreferenceDetail) -> dict[str, object]:
    return {
        **asdict(detail.preference),
        "attribute": serialize_attribute(detail.attribute),
    }


def serialize_donation_attribute(tag: DonationAttribute) -> dict[str, object]:
    return asdict(tag)


def serialize_donation_attribute_detail(
    detail: DonationAttributeDetail,
) -> dict[str, object]:
    return {
        **asdict(detail.donation_attribute),
        "attribute": serialize_attribute(detail.attribute),
    }


def serialize_donation(donation: Donation) -> dict[str, object]:
    payload = asdict(donation)
    if donation.expiry_date is not None:
        payload["expiry_date"] = donation.expiry_date.isoformat()
    return payload


def serialize_recipient(recipient: Recipient) -> dict[str, object]:
    return asdict(recipient)


def serialize_match(result: MatchResult) -> dict[str, object]:
    return result.to_dict()
