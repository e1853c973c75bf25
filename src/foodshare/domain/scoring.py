"""Match scoring that blends proximity with preference overlap.

A score is ``round(0.4 * distance_score + 0.6 * preference_score)`` where both
components are on a 0-100 scale. Distance decays linearly from 100 at the
anchor to 0 at the search radius. Preference overlap is the share of the
recipient's total importance covered by the donation's attributes.

When either side has nothing recorded (no preferences, or no attributes) the
score is 0 even for a candidate next door.
"""

from collections.abc import Iterable, Set
from math import floor
from typing import Protocol

DISTANCE_WEIGHT = 0.4
PREFERENCE_WEIGHT = 0.6
MAX_SCORE = 100


class WeightedPreference(Protocol):
    """Anything exposing an attribute id and an importance weight."""

    @property
    def attribute_id(self) -> int: ...

    @property
    def importance(self) -> int: ...


def distance_score(distance_km: float, radius_km: float) -> float:
    """Return 100 at distance 0, falling linearly to 0 at the radius."""
    if radius_km <= 0:
        return float(MAX_SCORE) if distance_km == 0 else 0.0
    return max(0.0, MAX_SCORE * (1 - distance_km / radius_km))


def preference_score(
    candidate_attribute_ids: Set[int],
    preferences: Iterable[WeightedPreference],
) -> float:
    """Return the importance-weighted share of preferences that are satisfied."""
    achieved = 0
    max_possible = 0
    for preference in preferences:
        if preference.attribute_id in candidate_attribute_ids:
            achieved += preference.importance
        max_possible += preference.importance
    if max_possible <= 0:
        return 0.0
    return achieved / max_possible * MAX_SCORE


def score_match(
    distance_km: float,
    radius_km: float,
    candidate_attribute_ids: Set[int],
    preferences: Iterable[WeightedPreference],
) -> int:
    """Return the blended 0-100 match score for a single candidate."""
    preferences = list(preferences)
    if not preferences or not candidate_attribute_ids:
        return 0
    blended = (
        distance_score(distance_km, radius_km) * DISTANCE_WEIGHT
        + preference_score(candidate_attribute_ids, preferences) * PREFERENCE_WEIGHT
    )
    return min(MAX_SCORE, max(0, _round_half_up(blended)))


def _round_half_up(value: float) -> int:
    return int(floor(value + 0.5))
