"""
Trial license records for the license catalog.

A license is read from the remote directory page as a (key, generation date)
pair. Its expiration date, validity flag and remaining valid days are derived
once, when the record is built, against the calendar day supplied by the
caller (in practice the day of the catalog refresh).
"""

import enum
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Optional

from license_utils import (
    LICENSE_VALIDITY_DAYS,
    compute_expiration_date,
    compute_nb_valid_days,
    is_within_validity,
    start_of_day,
)

# Generation dates are published as e.g. "2024-02-15", possibly followed by
# a time or a size column
DATE_FORMAT = "%Y-%m-%d"
_DATE_PATTERN = re.compile(r"(\d{4}-\d{2}-\d{2})(?:\s|$)")


# ---------------------------------------------------------------------------
# Error classes
# ---------------------------------------------------------------------------


class LicenseCatalogError(Exception):
    """Base class for license catalog errors."""
    pass


class FetchError(LicenseCatalogError):
    """The license page could not be retrieved."""

    def __init__(self, message: str, url: str = "", status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ParseError(LicenseCatalogError):
    """The license page could not be processed at all."""
    pass


class InvalidLicenseError(LicenseCatalogError):
    """A single page entry does not describe a usable license."""

    def __init__(self, message: str, key_text: str = "", date_text: str = ""):
        super().__init__(message)
        self.key_text = key_text
        self.date_text = date_text


class CatalogRefreshError(LicenseCatalogError):
    """A catalog refresh failed; the previous snapshot, if any, is kept."""

    def __init__(self, message: str, cause: Optional[FetchError] = None):
        super().__init__(message)
        self.cause = cause


class NotFoundReason(str, enum.Enum):
    """Why a license lookup matched nothing."""
    EMPTY = "empty"
    NO_DATE_MATCH = "no_date_match"
    NO_COUNT_MATCH = "no_count_match"


class LicenseNotFoundError(LicenseCatalogError):
    """No license matches the lookup. An expected outcome, not a bug."""

    def __init__(self, reason: NotFoundReason, date: Optional[date] = None, count: Optional[int] = None):
        if reason == NotFoundReason.NO_DATE_MATCH:
            message = f"License expiring on {date.isoformat()} not found."
        elif reason == NotFoundReason.NO_COUNT_MATCH:
            message = f"License expiring in {count} days not found."
        else:
            message = "Latest license not found."
        super().__init__(message)
        self.reason = reason
        self.date = date
        self.count = count


# ---------------------------------------------------------------------------
# License dataclass
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class License:
    """A trial license and its validity window as of the day it was built."""

    key: str
    generation_date: datetime
    expiration_date: datetime
    valid: bool
    nb_valid_days: int
    initial_validity_days: int = LICENSE_VALIDITY_DAYS

    def expires_on(self, day: date) -> bool:
        """Check if the license expires on the given calendar day."""
        if isinstance(day, datetime):
            day = day.date()
        return self.expiration_date.date() == day

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON shape served to clients."""
        return {
            "key": self.key,
            "generationDate": self.generation_date.isoformat(),
            "expirationDate": self.expiration_date.isoformat(),
            "initialValidityDays": self.initial_validity_days,
            "nbValidDays": self.nb_valid_days,
            "valid": self.valid,
        }


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


def parse_generation_date(date_text: str) -> datetime:
    """Parse the leading YYYY-MM-DD date of the text into its start of day.

    Anything after the date and a whitespace separator is ignored.

    Raises:
        ValueError: If the text does not start with the pattern or is not a real date.
    """
    text = (date_text or "").strip()
    match = _DATE_PATTERN.match(text)
    if not match:
        raise ValueError(f"'{text}' does not start with YYYY-MM-DD")
    return start_of_day(datetime.strptime(match.group(1), DATE_FORMAT))


def build_license(key_text: str, date_text: str, today: date) -> License:
    """Build a License from one raw page entry.

    Args:
        key_text: Key extracted from the link target.
        date_text: Generation date text preceding the link.
        today: Calendar day the derived fields are computed against.

    Returns:
        License with expiration, validity and remaining days derived.

    Raises:
        InvalidLicenseError: If the key is empty or the date cannot be parsed.
    """
    key = (key_text or "").strip()
    if not key:
        raise InvalidLicenseError("License key is empty", key_text, date_text)

    try:
        generation_date = parse_generation_date(date_text)
    except ValueError as e:
        raise InvalidLicenseError(
            f"Invalid generation date for license '{key}': {e}", key_text, date_text
        ) from e

    expiration_date = compute_expiration_date(generation_date)

    return License(
        key=key,
        generation_date=generation_date,
        expiration_date=expiration_date,
        valid=is_within_validity(generation_date, expiration_date, today),
        nb_valid_days=compute_nb_valid_days(expiration_date, today),
    )
