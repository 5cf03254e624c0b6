"""
License utility functions for validity window and expiry arithmetic.
"""

import math
from datetime import date, datetime, time, timedelta
from typing import Union

# Every trial license is valid for this many calendar days, generation day included.
LICENSE_VALIDITY_DAYS = 60

SECONDS_PER_DAY = 86400


def start_of_day(day: Union[date, datetime]) -> datetime:
    """Return midnight of the given calendar day."""
    if isinstance(day, datetime):
        day = day.date()
    return datetime.combine(day, time.min)


def end_of_day(day: Union[date, datetime]) -> datetime:
    """Return the last instant (23:59:59.999999) of the given calendar day."""
    if isinstance(day, datetime):
        day = day.date()
    return datetime.combine(day, time.max)


def compute_expiration_date(generation_date: Union[date, datetime],
                            validity_days: int = LICENSE_VALIDITY_DAYS) -> datetime:
    """Compute the last valid instant of a license.

    Args:
        generation_date: Day the license was issued.
        validity_days: Number of valid days, generation day included.

    Returns:
        End of the day ``validity_days - 1`` days after the generation day.
    """
    return end_of_day(start_of_day(generation_date) + timedelta(days=validity_days - 1))


def round_half_away_from_zero(value: float) -> int:
    """Round to the nearest integer, ties going away from zero (2.5 -> 3, -2.5 -> -3)."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def compute_nb_valid_days(expiration_date: datetime, today: date) -> int:
    """Compute the number of whole days remaining until expiration.

    The difference is measured from the end of ``today`` to the expiration
    instant, so the last day of validity yields 0.

    Args:
        expiration_date: Last valid instant of the license.
        today: Current calendar day.

    Returns:
        Remaining days, never negative.
    """
    remaining = (expiration_date - end_of_day(today)).total_seconds() / SECONDS_PER_DAY
    return max(0, round_half_away_from_zero(remaining))


def is_within_validity(generation_date: datetime, expiration_date: datetime, today: date) -> bool:
    """Check whether ``today`` falls in [generation day, expiration day], inclusive."""
    return generation_date.date() <= today <= expiration_date.date()
