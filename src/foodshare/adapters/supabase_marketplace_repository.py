"""Supabase implementation for recipients and donations."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from foodshare.adapters.supabase_query import execute, optional_float
from foodshare.domain.geo import latitude_band
from foodshare.domain.models import Coordinate, Donation, DonationStatus, Recipient
from foodshare.services.marketplace import MarketplaceRepository
from foodshare.services.proximity import find_within_radius, is_available


@dataclass
class SupabaseMarketplaceRepository(MarketplaceRepository):
    """Supabase-backed repository for matching entities."""

    client: Client

    def get_recipient(self, recipient_id: int) -> Recipient | None:
        """Return a recipient by id, if present."""
        rows = execute(
            self.client.table("recipients")
            .select("*")
            .eq("id", recipient_id)
            .limit(1),
            "recipient lookup",
        )
        if not rows:
            return None
        return _parse_recipient(rows[0])

    def get_donation(self, donation_id: int) -> Donation | None:
        """Return a donation by id, if present."""
        rows = execute(
            self.client.table("donations").select("*").eq("id", donation_id).limit(1),
            "donation lookup",
        )
        if not rows:
            return None
        return _parse_donation(rows[0])

    def get_nearby_donations(
        self, latitude: float, longitude: float, radius_km: float
    ) -> list[Donation]:
        """Return available donations within the radius, nearest first."""
        center = Coordinate(latitude, longitude)
        min_lat, max_lat = latitude_band(center, radius_km)
        rows = execute(
            self.client.table("donations")
            .select("*")
            .eq("status", DonationStatus.AVAILABLE)
            .gte("latitude", min_lat)
            .lte("latitude", max_lat),
            "nearby donations",
        )
        return find_within_radius(
            center,
            radius_km,
            [_parse_donation(row) for row in rows],
            keep=is_available,
        )

    def get_nearby_recipients(
        self, latitude: float, longitude: float, radius_km: float
    ) -> list[Recipient]:
        """Return located recipients within the radius, nearest first."""
        center = Coordinate(latitude, longitude)
        min_lat, max_lat = latitude_band(center, radius_km)
        rows = execute(
            self.client.table("recipients")
            .select("*")
            .gte("latitude", min_lat)
            .lte("latitude", max_lat),
            "nearby recipients",
        )
        return find_within_radius(
            center, radius_km, [_parse_recipient(row) for row in rows]
        )


def _parse_recipient(row: dict[str, object]) -> Recipient:
    """Parse a recipients row into a domain model."""
    return Recipient(
        id=int(row["id"]),
        name=str(row.get("name", "")),
        latitude=optional_float(row.get("latitude")),
        longitude=optional_float(row.get("longitude")),
        organization_type=row.get("organization_type"),
        verification_status=str(row.get("verification_status") or "pending"),
    )


def _parse_donation(row: dict[str, object]) -> Donation:
    """Parse a donations row into a domain model."""
    expiry_raw = row.get("expiry_date")
    expiry_date = (
        datetime.fromisoformat(expiry_raw)
        if isinstance(expiry_raw, str) and expiry_raw
        else None
    )
    recipient_raw = row.get("recipient_id")
    return Donation(
        id=int(row["id"]),
        donor_id=int(row["donor_id"]),
        title=str(row.get("title", "")),
        status=str(row.get("status", "")),
        latitude=optional_float(row.get("latitude")),
        longitude=optional_float(row.get("longitude")),
        food_type=row.get("food_type"),
        quantity=row.get("quantity"),
        expiry_date=expiry_date,
        recipient_id=int(recipient_raw) if recipient_raw is not None else None,
    )
