"""Geo-proximity and preference weighted matching."""

import logging
from dataclasses import dataclass

from foodshare.domain.errors import NotFoundError
from foodshare.domain.geo import distance_between
from foodshare.domain.models import (
    Coordinate,
    Donation,
    MatchResult,
    Recipient,
)
from foodshare.domain.scoring import score_match
from foodshare.services.marketplace import MarketplaceRepository
from foodshare.services.preferences import PreferenceService
from foodshare.services.proximity import find_within_radius, is_available

_logger = logging.getLogger(__name__)

DEFAULT_RADIUS_KM = 10.0


@dataclass
class MatchingService:
    """Ranks nearby counterparts for a recipient or a donation."""

    marketplace: MarketplaceRepository
    preferences: PreferenceService
    default_radius_km: float = DEFAULT_RADIUS_KM

    def matching_donations_for_recipient(
        self, recipient_id: int, radius_km: float | None = None
    ) -> list[MatchResult[Donation]]:
        """Return available donations near a recipient, best match first."""
        radius = self._resolve_radius(radius_km)
        recipient = self.marketplace.get_recipient(recipient_id)
        if recipient is None:
            raise NotFoundError("Recipient", recipient_id)
        anchor = recipient.coordinate
        if anchor is None:
            _logger.info("Recipient has no location: recipient_id=%s", recipient_id)
            return []

        preferences = self.preferences.get_recipient_preferences(recipient_id)
        candidates = self._donations_near(anchor, radius)
        _logger.info(
            "Matching donations: recipient_id=%s radius_km=%s candidates=%s "
            "preferences=%s",
            recipient_id,
            radius,
            len(candidates),
            len(preferences),
        )
        if not candidates or not preferences:
            return [MatchResult(donation, 0) for donation in candidates]

        results = []
        for donation in candidates:
            attribute_ids = {
                detail.attribute_id
                for detail in self.preferences.get_donation_attributes(donation.id)
            }
            score = score_match(
                _distance(anchor, donation.coordinate),
                radius,
                attribute_ids,
                preferences,
            )
            results.append(MatchResult(donation, score))
        return _rank(results)

    def matching_recipients_for_donation(
        self, donation_id: int, radius_km: float | None = None
    ) -> list[MatchResult[Recipient]]:
        """Return recipients near a donation, best match first."""
        radius = self._resolve_radius(radius_km)
        donation = self.marketplace.get_donation(donation_id)
        if donation is None:
            raise NotFoundError("Donation", donation_id)
        anchor = donation.coordinate
        if anchor is None:
            _logger.info("Donation has no location: donation_id=%s", donation_id)
            return []

        attribute_ids = {
            detail.attribute_id
            for detail in self.preferences.get_donation_attributes(donation_id)
        }
        candidates = self._recipients_near(anchor, radius)
        _logger.info(
            "Matching recipients: donation_id=%s radius_km=%s candidates=%s "
            "attributes=%s",
            donation_id,
            radius,
            len(candidates),
            len(attribute_ids),
        )
        if not candidates or not attribute_ids:
            return [MatchResult(recipient, 0) for recipient in candidates]

        results = []
        for recipient in candidates:
            preferences = self.preferences.get_recipient_preferences(recipient.id)
            score = score_match(
                _distance(anchor, recipient.coordinate),
                radius,
                attribute_ids,
                preferences,
            )
            results.append(MatchResult(recipient, score))
        return _rank(results)

    def nearby_donations(
        self, latitude: float, longitude: float, radius_km: float | None = None
    ) -> list[Donation]:
        """Return available donations around a point, nearest first."""
        return self._donations_near(
            Coordinate(latitude, longitude), self._resolve_radius(radius_km)
        )

    def nearby_recipients(
        self, latitude: float, longitude: float, radius_km: float | None = None
    ) -> list[Recipient]:
        """Return recipients around a point, nearest first."""
        return self._recipients_near(
            Coordinate(latitude, longitude), self._resolve_radius(radius_km)
        )

    def _donations_near(self, anchor: Coordinate, radius_km: float) -> list[Donation]:
        # Backends may prefilter coarsely, so the exact radius is applied here.
        fetched = self.marketplace.get_nearby_donations(
            anchor.latitude, anchor.longitude, radius_km
        )
        return find_within_radius(anchor, radius_km, fetched, keep=is_available)

    def _recipients_near(
        self, anchor: Coordinate, radius_km: float
    ) -> list[Recipient]:
        fetched = self.marketplace.get_nearby_recipients(
            anchor.latitude, anchor.longitude, radius_km
        )
        return find_within_radius(anchor, radius_km, fetched)

    def _resolve_radius(self, radius_km: float | None) -> float:
        return self.default_radius_km if radius_km is None else radius_km


def _distance(anchor: Coordinate, coordinate: Coordinate | None) -> float:
    if coordinate is None:
        raise ValueError("Candidate is missing a location")
    return distance_between(anchor, coordinate)


def _rank(results: list[MatchResult]) -> list[MatchResult]:
    """Order by score, highest first; sorted() keeps ties in filter order."""
    return sorted(results, key=lambda result: result.match_score, reverse=True)
