"""
HTTP retrieval of the license directory page.
"""

import asyncio
import logging
from typing import Optional, Protocol

import requests

from license import FetchError

logger = logging.getLogger(__name__)

USER_AGENT = "TrialLicenseProvider/1.0"


class Fetcher(Protocol):
    """Source of the license page text."""

    async def fetch(self) -> str:
        ...


class PageFetcher:
    """Fetches the license page with requests, off the event loop.

    No retry: a failed request raises FetchError immediately.
    """

    def __init__(self, url: str, timeout: Optional[float] = None, session: Optional[requests.Session] = None):
        """
        Initialize the fetcher.

        Args:
            url: URL of the license directory page
            timeout: Request timeout in seconds, None to wait indefinitely
            session: Optional requests session to reuse connections
        """
        self.url = url
        self.timeout = timeout
        self._session = session

    async def fetch(self) -> str:
        """Fetch the page text without blocking the event loop."""
        return await asyncio.to_thread(self._fetch_sync)

    def _fetch_sync(self) -> str:
        http = self._session or requests
        logger.debug("Fetching license page %s", self.url)
        try:
            response = http.get(
                self.url,
                timeout=self.timeout,
                headers={"User-Agent": USER_AGENT},
            )
            response.raise_for_status()
        except requests.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            logger.error("License page %s returned HTTP %s", self.url, status_code)
            raise FetchError(
                f"License page returned HTTP {status_code}", url=self.url, status_code=status_code
            ) from e
        except requests.RequestException as e:
            logger.error("Failed to fetch license page %s: %s", self.url, e)
            raise FetchError(f"Failed to fetch license page: {e}", url=self.url) from e

        logger.debug("Fetched license page %s (%d bytes)", self.url, len(response.content))
        return response.text
