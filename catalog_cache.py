"""
Day-granularity cache of the license catalog.

The cache holds at most one snapshot: the valid licenses of the directory
page, newest first, as of one calendar day. A snapshot stays fresh for the
rest of that day; the first access on a later day rebuilds it from the page.
Refresh is single-flight: callers hitting a stale cache at the same time
wait for one refresh instead of each fetching the page.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Tuple

from clock import Clock, SystemClock
from fetcher import Fetcher
from license import CatalogRefreshError, FetchError, InvalidLicenseError, License, build_license
from page_parser import DEFAULT_KEY_PREFIX, DEFAULT_KEY_SUFFIX, parse_license_page

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogSnapshot:
    """Valid licenses as of one calendar day, sorted by generation date descending."""
    as_of_date: date
    entries: Tuple[License, ...]
    skipped: int = 0
    version: int = 0

    def __len__(self) -> int:
        return len(self.entries)


def build_catalog(
    content: str,
    today: date,
    key_prefix: str = DEFAULT_KEY_PREFIX,
    key_suffix: str = DEFAULT_KEY_SUFFIX,
) -> Tuple[List[License], int]:
    """Turn page text into the sorted list of valid licenses.

    Entries the parser or the factory rejects are dropped and counted.

    Returns:
        (valid licenses newest first, number of dropped entries)
    """
    parsed = parse_license_page(content, key_prefix, key_suffix)
    for diagnostic in parsed.diagnostics:
        logger.debug("Skipped link #%d (%s): %s", diagnostic.position, diagnostic.href, diagnostic.reason)

    skipped = len(parsed.diagnostics)
    licenses: List[License] = []
    for entry in parsed.entries:
        try:
            licenses.append(build_license(entry.key_text, entry.date_text, today))
        except InvalidLicenseError as e:
            logger.debug("Dropped license entry: %s", e)
            skipped += 1

    valid = [lic for lic in licenses if lic.valid]
    # Newest first; on the same day the entry listed last on the page wins
    valid.sort(key=lambda lic: lic.generation_date)
    valid.reverse()
    return valid, skipped


class CatalogCache:
    """Owns the current catalog snapshot and decides when it is stale."""

    def __init__(
        self,
        fetcher: Fetcher,
        clock: Optional[Clock] = None,
        key_prefix: str = DEFAULT_KEY_PREFIX,
        key_suffix: str = DEFAULT_KEY_SUFFIX,
    ):
        self.fetcher = fetcher
        self.clock = clock or SystemClock()
        self.key_prefix = key_prefix
        self.key_suffix = key_suffix
        self._snapshot: Optional[CatalogSnapshot] = None
        self._lock = asyncio.Lock()

    @property
    def snapshot(self) -> Optional[CatalogSnapshot]:
        """Current snapshot, fresh or not, without any I/O."""
        return self._snapshot

    def is_fresh(self) -> bool:
        """Check if a snapshot exists for the current calendar day."""
        return self._snapshot is not None and self._snapshot.as_of_date == self.clock.today()

    async def get(self) -> CatalogSnapshot:
        """Return today's snapshot, refreshing it first if stale.

        Raises:
            CatalogRefreshError: If the page could not be fetched.
            ParseError: If the page could not be parsed at all.
        """
        if self.is_fresh():
            logger.debug("Catalog cache hit (as of %s)", self._snapshot.as_of_date)
            return self._snapshot

        async with self._lock:
            # Another caller may have refreshed while we waited
            if self.is_fresh():
                return self._snapshot
            logger.info("Catalog cache is stale, refreshing")
            return await self._refresh()

    async def refresh(self) -> CatalogSnapshot:
        """Rebuild the snapshot from the page regardless of freshness."""
        async with self._lock:
            return await self._refresh()

    async def _refresh(self) -> CatalogSnapshot:
        today = self.clock.today()
        try:
            content = await self.fetcher.fetch()
        except FetchError as e:
            logger.error("Catalog refresh failed, keeping previous snapshot: %s", e)
            raise CatalogRefreshError(f"Catalog refresh failed: {e}", cause=e) from e

        licenses, skipped = build_catalog(content, today, self.key_prefix, self.key_suffix)
        version = self._snapshot.version + 1 if self._snapshot else 1
        self._snapshot = CatalogSnapshot(
            as_of_date=today,
            entries=tuple(licenses),
            skipped=skipped,
            version=version,
        )
        logger.info(
            "Catalog refreshed for %s: %d valid licenses, %d entries skipped",
            today, len(licenses), skipped
        )
        return self._snapshot
