"""Shared test helpers for the trial license provider test suite."""

import asyncio
from typing import Iterable, List, Optional, Tuple

from page_parser import DEFAULT_KEY_PREFIX, DEFAULT_KEY_SUFFIX


def license_link(key: str) -> str:
    """Link target of a license file, as published on the page."""
    return f"{DEFAULT_KEY_PREFIX}{key}{DEFAULT_KEY_SUFFIX}"


def make_page(entries: Iterable[Tuple[str, str]]) -> str:
    """Build a directory page from (date text, key) pairs."""
    lines = [
        f'{date_text} <a href="{license_link(key)}">EBX5 Trial - {key}.txt</a>'
        for date_text, key in entries
    ]
    return (
        "<html><head><title>Index of /licenses</title></head><body>\n"
        "<h1>Index of /licenses</h1>\n<pre>\n"
        + "\n".join(lines)
        + "\n</pre>\n</body></html>"
    )


class FakeFetcher:
    """In-memory fetcher counting calls.

    ``pages`` are served in order, the last one repeating. An exception in
    the list is raised instead of returned.
    """

    def __init__(self, *pages, delay: float = 0.0):
        self.pages: List = list(pages)
        self.delay = delay
        self.calls = 0

    async def fetch(self) -> str:
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        page = self.pages[min(self.calls, len(self.pages)) - 1]
        if isinstance(page, Exception):
            raise page
        return page

    def push(self, page) -> None:
        """Serve ``page`` from the next call on."""
        self.pages = self.pages[:self.calls] + [page]


def scenario_page(extra: Optional[List[Tuple[str, str]]] = None) -> str:
    """Page with one expired (OLD) and one valid (NEW) license."""
    entries = [("2024-02-15", "NEW"), ("2024-01-01", "OLD")]
    return make_page(entries + (extra or []))
