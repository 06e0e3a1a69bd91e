"""Tests for the review outcome, interval and status rules."""

import math
from datetime import timedelta

import pytest

from core.srs.constants import BASE_INTERVAL_DAYS, CardStatus, MIN_EASE
from core.srs.errors import InvalidInput
from core.srs.scheduling import (
    classify_status,
    evaluate_outcome,
    interval_days,
    next_due_date,
    round_half_up,
)


# ---- Review outcome ----

@pytest.mark.parametrize("level", [0, 1, 2, 3, 4])
def test_correct_recall_advances_one_level(level):
    next_level, _ = evaluate_outcome(level, True, 2.5)
    assert next_level == level + 1


def test_correct_recall_caps_at_level_five():
    next_level, ease = evaluate_outcome(5, True, 2.5)
    assert next_level == 5
    assert ease == pytest.approx(2.6)


@pytest.mark.parametrize("level", [0, 1, 2, 3, 4, 5])
def test_failed_recall_drops_two_levels_never_below_zero(level):
    next_level, _ = evaluate_outcome(level, False, 2.5)
    assert next_level == max(0, level - 2)
    assert next_level >= 0


def test_ease_reward_and_penalty():
    assert evaluate_outcome(2, True, 2.5)[1] == pytest.approx(2.6)
    assert evaluate_outcome(2, False, 2.5)[1] == pytest.approx(2.3)


def test_ease_never_drops_below_floor():
    level, ease = 5, 2.5
    for _ in range(25):
        level, ease = evaluate_outcome(level, False, ease)
        assert ease >= MIN_EASE
    assert ease == pytest.approx(MIN_EASE)
    assert level == 0


def test_ease_near_floor_is_clamped_not_rejected():
    # 1.4 - 0.2 = 1.2 is a computed output, so it is clamped
    assert evaluate_outcome(1, False, 1.4)[1] == pytest.approx(MIN_EASE)


def test_repeated_rewards_do_not_drift():
    ease = 2.5
    for _ in range(10):
        _, ease = evaluate_outcome(0, True, ease)
    assert ease == 3.5


@pytest.mark.parametrize("level", [-1, 6, 2.0, True, None])
def test_invalid_level_is_rejected(level):
    with pytest.raises(InvalidInput):
        evaluate_outcome(level, True, 2.5)


@pytest.mark.parametrize("ease", [1.29, 0.0, -2.5, math.nan, math.inf, "2.5"])
def test_invalid_ease_is_rejected(ease):
    with pytest.raises(InvalidInput):
        evaluate_outcome(2, True, ease)


# ---- Intervals ----

def test_round_half_up_differs_from_bankers_rounding():
    assert round(2.5) == 2
    assert round_half_up(2.5) == 3
    assert round_half_up(0.5) == 1
    assert round_half_up(2.4999) == 2
    assert round_half_up(-1.5) == -2


def test_half_day_interval_rounds_up():
    # base 1 * ease 1.5 = 1.5 days -> 2
    assert interval_days(1, 1.5) == 2
    # base 3 * ease 2.5 = 7.5 days -> 8
    assert interval_days(2, 2.5) == 8
    # base 7 * ease 2.5 = 17.5 days -> 18
    assert interval_days(3, 2.5) == 18


def test_float_noise_does_not_change_rounding():
    # 3 * 2.7 == 8.100000000000001 in binary floating point
    assert interval_days(2, 2.7) == 8


def test_level_zero_is_due_same_day(now):
    assert interval_days(0, 3.0) == 0
    assert next_due_date(0, 3.0, now) == now


@pytest.mark.parametrize("level", range(6))
def test_interval_scales_base_table(level):
    assert interval_days(level, 2.0) == BASE_INTERVAL_DAYS[level] * 2


def test_next_due_date_adds_whole_days(now):
    assert next_due_date(1, 2.6, now) == now + timedelta(days=3)
    assert next_due_date(5, 1.3, now) == now + timedelta(days=39)


def test_next_due_date_requires_aware_timestamp(now):
    with pytest.raises(InvalidInput):
        next_due_date(1, 2.5, now.replace(tzinfo=None))


# ---- Status ----

def test_never_reviewed_card_is_new_regardless_of_level():
    assert classify_status(0, 0) == CardStatus.NEW
    assert classify_status(3, 0) == CardStatus.NEW


@pytest.mark.parametrize("level,expected", [
    (0, CardStatus.LEARNING),
    (1, CardStatus.LEARNING),
    (2, CardStatus.REVIEW),
    (3, CardStatus.REVIEW),
    (4, CardStatus.MASTERED),
    (5, CardStatus.MASTERED),
])
def test_status_follows_level_after_first_review(level, expected):
    assert classify_status(level, 1) == expected
    assert classify_status(level, 40) == expected


@pytest.mark.parametrize("status,levels", [
    (CardStatus.LEARNING, [0, 1]),
    (CardStatus.REVIEW, [2, 3]),
    (CardStatus.MASTERED, [4, 5]),
])
def test_classification_round_trips_through_level(status, levels):
    for level in levels:
        assert classify_status(level, review_count=3) == status


def test_classify_rejects_out_of_range_level():
    with pytest.raises(InvalidInput):
        classify_status(6, 1)
