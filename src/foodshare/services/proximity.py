"""Radius filtering over entities with optional coordinates."""

from collections.abc import Callable, Iterable
from typing import Protocol, TypeVar

from foodshare.domain.geo import distance_between
from foodshare.domain.models import Coordinate, DonationStatus


class Locatable(Protocol):
    """Entity that may or may not have a known location."""

    @property
    def coordinate(self) -> Coordinate | None: ...


class HasStatus(Protocol):
    @property
    def status(self) -> str: ...


LocatableT = TypeVar("LocatableT", bound=Locatable)


def is_available(listing: HasStatus) -> bool:
    """Return True for listings that can still be claimed."""
    return listing.status == DonationStatus.AVAILABLE


def find_within_radius(
    center: Coordinate,
    radius_km: float,
    candidates: Iterable[LocatableT],
    *,
    keep: Callable[[LocatableT], bool] | None = None,
) -> list[LocatableT]:
    """Return candidates within ``radius_km`` of ``center``, nearest first.

    Candidates without a coordinate are skipped, as are those rejected by
    ``keep`` when it is given. A negative radius matches nothing.
    """
    in_range: list[tuple[float, LocatableT]] = []
    for candidate in candidates:
        coordinate = candidate.coordinate
        if coordinate is None:
            continue
        if keep is not None and not keep(candidate):
            continue
        distance = distance_between(center, coordinate)
        if distance <= radius_km:
            in_range.append((distance, candidate))
    in_range.sort(key=lambda pair: pair[0])
    return [candidate for _, candidate in in_range]
