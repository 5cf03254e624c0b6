"""
Unit tests for license_utils.py.
"""

from datetime import date, datetime, time

from license_utils import (
    LICENSE_VALIDITY_DAYS,
    compute_expiration_date,
    compute_nb_valid_days,
    end_of_day,
    is_within_validity,
    round_half_away_from_zero,
    start_of_day,
)


def test_day_bounds():
    assert start_of_day(date(2024, 3, 10)) == datetime(2024, 3, 10, 0, 0)
    assert start_of_day(datetime(2024, 3, 10, 15, 30)) == datetime(2024, 3, 10, 0, 0)
    assert end_of_day(date(2024, 3, 10)) == datetime.combine(date(2024, 3, 10), time.max)


def test_compute_expiration_date():
    assert LICENSE_VALIDITY_DAYS == 60

    # Leap year: Feb 15 + 59 days
    expiration = compute_expiration_date(date(2024, 2, 15))
    assert expiration.date() == date(2024, 4, 14)
    assert expiration.time() == time.max

    assert compute_expiration_date(date(2024, 1, 1)).date() == date(2024, 2, 29)
    assert compute_expiration_date(date(2023, 1, 1)).date() == date(2023, 3, 1)

    # Time of day on the generation date is ignored
    assert compute_expiration_date(datetime(2024, 2, 15, 18, 0)) == expiration


def test_round_half_away_from_zero():
    assert round_half_away_from_zero(2.5) == 3
    assert round_half_away_from_zero(3.5) == 4
    assert round_half_away_from_zero(2.49) == 2
    assert round_half_away_from_zero(-2.5) == -3
    assert round_half_away_from_zero(-0.4) == 0
    assert round_half_away_from_zero(0.0) == 0


def test_compute_nb_valid_days():
    expiration = compute_expiration_date(date(2024, 2, 15))  # 2024-04-14

    assert compute_nb_valid_days(expiration, date(2024, 3, 10)) == 35
    assert compute_nb_valid_days(expiration, date(2024, 2, 15)) == 59

    # Last day of validity
    assert compute_nb_valid_days(expiration, date(2024, 4, 14)) == 0

    # Never negative once expired
    assert compute_nb_valid_days(expiration, date(2024, 4, 15)) == 0
    assert compute_nb_valid_days(expiration, date(2030, 1, 1)) == 0


def test_is_within_validity():
    generation = start_of_day(date(2024, 2, 15))
    expiration = compute_expiration_date(generation)

    assert is_within_validity(generation, expiration, date(2024, 2, 15))
    assert is_within_validity(generation, expiration, date(2024, 4, 14))
    assert not is_within_validity(generation, expiration, date(2024, 2, 14))
    assert not is_within_validity(generation, expiration, date(2024, 4, 15))
