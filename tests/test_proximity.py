"""Tests for the radius filter."""

from foodshare.domain.geo import distance_between
from foodshare.domain.models import Coordinate, DonationStatus
from foodshare.services.proximity import find_within_radius, is_available
from tests.conftest import (
    FIFTEEN_KM_NORTH,
    SARAVANA,
    SRM,
    make_donation,
    make_recipient,
)

CENTER = Coordinate(*SRM)


def test_excludes_candidates_outside_radius() -> None:
    near = make_recipient(1, SARAVANA)
    far = make_recipient(2, FIFTEEN_KM_NORTH)

    result = find_within_radius(CENTER, 10, [far, near])

    assert result == [near]


def test_excludes_candidates_without_location() -> None:
    located = make_recipient(1, SARAVANA)
    unlocated = make_recipient(2, None)

    result = find_within_radius(CENTER, 10, [unlocated, located])

    assert result == [located]


def test_orders_nearest_first() -> None:
    middle = make_recipient(1, (12.85, 80.0444))
    nearest = make_recipient(2, SARAVANA)
    farthest = make_recipient(3, (12.9, 80.0444))

    result = find_within_radius(CENTER, 20, [middle, farthest, nearest])

    assert [r.id for r in result] == [2, 1, 3]


def test_equal_distances_keep_input_order() -> None:
    first = make_recipient(1, SARAVANA)
    second = make_recipient(2, SARAVANA)

    result = find_within_radius(CENTER, 10, [first, second])

    assert [r.id for r in result] == [1, 2]


def test_keep_predicate_skips_unavailable_donations() -> None:
    available = make_donation(1)
    claimed = make_donation(2, status=DonationStatus.CLAIMED)
    completed = make_donation(3, status=DonationStatus.COMPLETED)

    result = find_within_radius(
        CENTER, 10, [claimed, available, completed], keep=is_available
    )

    assert result == [available]


def test_zero_radius_keeps_only_coincident_points() -> None:
    here = make_recipient(1, SRM)
    nearby = make_recipient(2, SARAVANA)

    assert find_within_radius(CENTER, 0, [nearby, here]) == [here]


def test_every_result_is_within_radius() -> None:
    candidates = [
        make_recipient(index, (12.8230 + index * 0.01, 80.0444 - index * 0.007))
        for index in range(-20, 21)
    ] + [make_recipient(99, None)]
    for radius in (0, 0.5, 1, 3, 7.5, 10, 25):
        result = find_within_radius(CENTER, radius, candidates)
        for candidate in result:
            assert candidate.coordinate is not None
            assert distance_between(CENTER, candidate.coordinate) <= radius
        excluded = [c for c in candidates if c not in result]
        for candidate in excluded:
            assert (
                candidate.coordinate is None
                or distance_between(CENTER, candidate.coordinate) > radius
            )


def test_negative_radius_matches_nothing() -> None:
    here = make_recipient(1, SRM)

    assert find_within_radius(CENTER, -1, [here]) == []
