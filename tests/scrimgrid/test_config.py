from __future__ import annotations

import pytest

from scrimgrid.config import Config, days_matching, hours_between, hours_matching
from scrimgrid.grid import DayOfWeek, TimezoneOffset


def test_defaults_describe_the_canonical_grid():
    C = Config()
    C.validate()
    assert C.ORG_TIMEZONE is TimezoneOffset.UTC_PLUS_1
    assert C.HOURS == tuple(range(15, 24))
    assert len(C.DAYS) == 7
    assert len(C.cells()) == 63
    assert C.cells()[0] == (DayOfWeek.MONDAY, 15)
    assert C.cells()[9] == (DayOfWeek.TUESDAY, 15)
    assert C.evening_hours == (18, 19, 20, 21, 22, 23)


def test_days_given_as_strings_are_parsed():
    C = Config(DAYS=("Monday", "friday"))
    assert C.DAYS == (DayOfWeek.MONDAY, DayOfWeek.FRIDAY)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"DAYS": ()},
        {"DAYS": ("monday", "monday")},
        {"HOURS": ()},
        {"HOURS": (22, 23, 24)},
        {"HOURS": (15, 17, 18)},
        {"EVENING_START": 14},
        {"PLAYER_WEEKS_AHEAD": -1},
        {"RATE_LIMIT_MAX_REQUESTS": 0},
        {"SESSION_HOURS": 10},
        {"MAX_SESSIONS_PER_DAY": 0},
        {"TIME_LIMIT_SEC": 0.0},
    ],
)
def test_validate_rejects_bad_values(kwargs):
    with pytest.raises(ValueError):
        Config(**kwargs).validate()


def test_hours_between_wraps():
    pred = hours_between(22, 2)
    assert [h for h in range(24) if pred(h)] == [0, 1, 22, 23]


def test_hours_matching_is_bounded_to_window():
    C = Config()
    assert hours_matching(None, C)(15)
    assert not hours_matching(None, C)(3)
    assert hours_matching([18, 3], C)(18)
    assert not hours_matching([18, 3], C)(3)
    assert not hours_matching(lambda h: True, C)(12)


def test_days_matching_accepts_names_and_predicates():
    C = Config(DAYS=("monday", "tuesday"))
    assert days_matching(["Monday"], C)(DayOfWeek.MONDAY)
    assert not days_matching(["sunday"], C)(DayOfWeek.SUNDAY)
    assert not days_matching(lambda d: True, C)(DayOfWeek.SUNDAY)
