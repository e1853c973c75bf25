"""Tests for the match scorer."""

import pytest

from foodshare.domain.models import RecipientPreference
from foodshare.domain.scoring import (
    _round_half_up,
    distance_score,
    preference_score,
    score_match,
)


def _prefs(*pairs: tuple[int, int]) -> list[RecipientPreference]:
    return [
        RecipientPreference(recipient_id=1, attribute_id=attr, importance=importance)
        for attr, importance in pairs
    ]


def test_distance_score_decays_linearly() -> None:
    assert distance_score(0, 10) == 100
    assert distance_score(5, 10) == pytest.approx(50)
    assert distance_score(10, 10) == 0


def test_distance_score_clamps_beyond_radius() -> None:
    assert distance_score(15, 10) == 0


def test_distance_score_with_zero_radius() -> None:
    assert distance_score(0, 0) == 100
    assert distance_score(0.1, 0) == 0


def test_preference_score_equal_importance_extremes() -> None:
    preferences = _prefs((1, 3), (2, 3), (3, 3))

    assert preference_score({1, 2, 3}, preferences) == 100
    assert preference_score({7, 8}, preferences) == 0


def test_preference_score_weights_by_importance() -> None:
    preferences = _prefs((1, 5), (2, 1), (3, 4))

    assert preference_score({1}, preferences) == pytest.approx(50)
    assert preference_score({2, 3}, preferences) == pytest.approx(50)


def test_preference_score_all_indifferent_is_zero() -> None:
    assert preference_score({1}, _prefs((1, 0), (2, 0))) == 0


def test_perfect_match_next_door_scores_100() -> None:
    assert score_match(0.02, 10, {1}, _prefs((1, 5))) == 100


def test_blend_is_forty_sixty() -> None:
    # distance score 50, preference score 50 -> 20 + 30
    assert score_match(5, 10, {1}, _prefs((1, 1), (2, 1))) == 50
    # distance score 100, no overlap -> 40
    assert score_match(0, 10, {9}, _prefs((1, 5))) == 40
    # distance score 0, full overlap -> 60
    assert score_match(10, 10, {1}, _prefs((1, 5))) == 60


def test_score_is_zero_without_candidate_attributes() -> None:
    assert score_match(0.02, 10, set(), _prefs((1, 5))) == 0


def test_score_is_zero_without_preferences() -> None:
    assert score_match(0.02, 10, {1, 2}, []) == 0


def test_score_rounds_half_up() -> None:
    assert _round_half_up(2.5) == 3
    assert _round_half_up(0.5) == 1
    assert _round_half_up(2.49) == 2
    # 62.5 * 0.4 + 25 * 0.6 = 40
    assert score_match(3.75, 10, {1}, _prefs((1, 1), (2, 3))) == 40


def test_score_is_always_an_integer_in_range() -> None:
    preferences = _prefs((1, 5), (2, 0), (3, 2), (4, 4))
    for distance in (0, 0.5, 2.5, 7.3, 9.99, 10, 25):
        for attrs in ({1}, {2}, {1, 3}, {1, 2, 3, 4}, {42}):
            score = score_match(distance, 10, attrs, preferences)
            assert isinstance(score, int)
            assert 0 <= score <= 100


def test_score_is_deterministic() -> None:
    preferences = _prefs((1, 5), (2, 2))

    first = score_match(3.3, 10, {1, 2}, preferences)
    second = score_match(3.3, 10, {1, 2}, preferences)

    assert first == second
