from datetime import date

from src.campus_attend.campus_attend.common.datetime_utils import iso_week_key, parse_iso_date
from src.campus_attend.campus_attend.common.numbers import ceil_product, round_half_up


def test_round_half_up_goes_away_from_zero_on_ties():
    assert round_half_up(2.5, 0) == 3.0
    assert round_half_up(0.66665, 4) == 0.6667
    assert round_half_up(0.125, 2) == 0.13
    # Python's round() would give 0.12 here
    assert round(0.125, 2) == 0.12


def test_round_half_up_keeps_short_values():
    assert round_half_up(0.75, 4) == 0.75
    assert round_half_up(1.0, 4) == 1.0


def test_ceil_product_is_exact_for_decimal_fractions():
    assert ceil_product(0.7, 10) == 7
    assert ceil_product(0.75, 40) == 30
    assert ceil_product(0.75, 41) == 31
    assert ceil_product(0.75, 0) == 0


def test_iso_week_key_uses_iso_year():
    assert iso_week_key(date(2025, 1, 8)) == "2025-W2"
    # Monday 29 Dec 2025 belongs to ISO week 1 of 2026
    assert iso_week_key(date(2025, 12, 29)) == "2026-W1"
    assert iso_week_key(date(2026, 1, 2)) == "2026-W1"


def test_parse_iso_date():
    assert parse_iso_date("2025-01-06") == date(2025, 1, 6)
