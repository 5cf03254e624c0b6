"""
License lookups against the cached catalog.

Three lookups are supported: the latest license, the license expiring on a
given day, and the license with a given number of remaining valid days. The
lookup kind is chosen by the caller through a criterion object; free-form
input (URL segments, chat text) is classified before it reaches this module.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional, Union

from catalog_cache import CatalogCache
from license import License, LicenseNotFoundError, NotFoundReason

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Criteria
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Latest:
    """The license with the most remaining valid days."""
    pass


@dataclass(frozen=True)
class ByDate:
    """The license expiring on a calendar day."""
    date: date

    def __post_init__(self):
        if isinstance(self.date, datetime):
            object.__setattr__(self, "date", self.date.date())


@dataclass(frozen=True)
class ByCount:
    """The license with exactly this many remaining valid days."""
    count: int

    def __post_init__(self):
        if isinstance(self.count, bool) or not isinstance(self.count, int):
            raise TypeError(f"Remaining days must be an integer, got {self.count!r}")
        if self.count < 0:
            raise ValueError(f"Remaining days must be non-negative, got {self.count}")


LicenseCriterion = Union[Latest, ByDate, ByCount]


# ---------------------------------------------------------------------------
# Resolver
# ---------------------------------------------------------------------------


class LicenseResolver:
    """Answers license lookups from a fresh catalog snapshot."""

    def __init__(self, cache: CatalogCache):
        self.cache = cache

    async def get_all(self) -> List[License]:
        """All valid licenses, newest first."""
        snapshot = await self.cache.get()
        return list(snapshot.entries)

    async def get_latest(self) -> License:
        """The newest valid license.

        Raises:
            LicenseNotFoundError: With reason EMPTY if the catalog is empty.
        """
        licenses = await self.get_all()
        if not licenses:
            raise LicenseNotFoundError(NotFoundReason.EMPTY)
        return licenses[0]

    async def get_by_date(self, day: date) -> License:
        """The license whose expiration date falls on ``day``.

        Raises:
            LicenseNotFoundError: EMPTY if the catalog is empty, NO_DATE_MATCH otherwise.
        """
        if isinstance(day, datetime):
            day = day.date()
        licenses = await self.get_all()
        if not licenses:
            raise LicenseNotFoundError(NotFoundReason.EMPTY, date=day)
        for lic in licenses:
            if lic.expires_on(day):
                return lic
        raise LicenseNotFoundError(NotFoundReason.NO_DATE_MATCH, date=day)

    async def get_by_remaining_days(self, count: int) -> License:
        """The first license, newest first, with exactly ``count`` remaining days.

        Raises:
            ValueError: If ``count`` is negative.
            LicenseNotFoundError: EMPTY if the catalog is empty, NO_COUNT_MATCH otherwise.
        """
        if count < 0:
            raise ValueError(f"Remaining days must be non-negative, got {count}")
        licenses = await self.get_all()
        if not licenses:
            raise LicenseNotFoundError(NotFoundReason.EMPTY, count=count)
        for lic in licenses:
            if lic.nb_valid_days == count:
                return lic
        raise LicenseNotFoundError(NotFoundReason.NO_COUNT_MATCH, count=count)

    # Operations consumed by the REST layer

    async def get_licenses(self) -> List[License]:
        return await self.get_all()

    async def get_license(self, criterion: Optional[LicenseCriterion] = None) -> License:
        """Resolve a criterion; ``None`` means the latest license."""
        if criterion is None or isinstance(criterion, Latest):
            return await self.get_latest()
        if isinstance(criterion, ByDate):
            return await self.get_by_date(criterion.date)
        if isinstance(criterion, ByCount):
            return await self.get_by_remaining_days(criterion.count)
        raise TypeError(f"Unsupported license criterion: {criterion!r}")

    async def get_latest_license(self) -> License:
        return await self.get_license(Latest())
