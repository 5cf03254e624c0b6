"""
Parser for the trial license directory page.

The page lists one license file per link, each link preceded by the date the
file was generated, e.g.::

    2024-02-15 <a href="view.cgi/EBX5 Trial 60 daysEnterprise Edition - ABCD.txt">...</a>

Only the raw (key text, date text) pairs are extracted here; dates are
interpreted by the license factory.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional
from urllib.parse import unquote

from bs4 import BeautifulSoup, Comment, NavigableString

from license import ParseError

logger = logging.getLogger(__name__)

DEFAULT_KEY_PREFIX = "view.cgi/EBX5 Trial 60 daysEnterprise Edition - "
DEFAULT_KEY_SUFFIX = ".txt"


@dataclass(frozen=True)
class RawLicenseEntry:
    """Key and generation date text of one link, uninterpreted."""
    key_text: str
    date_text: str


@dataclass(frozen=True)
class ParseDiagnostic:
    """A link that was skipped, and why."""
    position: int
    href: Optional[str]
    reason: str


@dataclass
class ParseResult:
    """Entries extracted from a page, plus the links that were skipped."""
    entries: List[RawLicenseEntry] = field(default_factory=list)
    diagnostics: List[ParseDiagnostic] = field(default_factory=list)


def _normalize(text: str) -> str:
    return " ".join(text.split())


def extract_key(href: str, key_prefix: str = DEFAULT_KEY_PREFIX, key_suffix: str = DEFAULT_KEY_SUFFIX) -> str:
    """Strip the file prefix and suffix from a link target to get the key."""
    key = unquote(href).strip()
    if key_prefix and key.startswith(key_prefix):
        key = key[len(key_prefix):]
    if key_suffix and key.endswith(key_suffix):
        key = key[:-len(key_suffix)]
    return key.strip()


def _preceding_text(link) -> Optional[str]:
    prev = link.previous_sibling
    if prev is None or isinstance(prev, Comment) or not isinstance(prev, NavigableString):
        return None
    text = _normalize(str(prev))
    return text or None


def parse_license_page(
    content: str,
    key_prefix: str = DEFAULT_KEY_PREFIX,
    key_suffix: str = DEFAULT_KEY_SUFFIX,
) -> ParseResult:
    """Extract raw license entries from the directory page.

    A link without a target or without a preceding text node is skipped and
    reported in ``diagnostics``; it never stops the remaining links from
    being parsed.

    Args:
        content: Full text body of the page.
        key_prefix: Prefix of the link target in front of the key.
        key_suffix: Suffix of the link target after the key.

    Returns:
        ParseResult with entries in document order.

    Raises:
        ParseError: If the content is not text or cannot be parsed at all.
    """
    if not isinstance(content, str):
        raise ParseError(f"License page content must be text, got {type(content).__name__}")

    try:
        soup = BeautifulSoup(content, "html.parser")
    except Exception as e:
        raise ParseError(f"License page could not be parsed: {e}") from e

    result = ParseResult()
    for position, link in enumerate(soup.find_all("a")):
        href = link.get("href")
        if not href:
            result.diagnostics.append(ParseDiagnostic(position, None, "link has no target"))
            continue

        date_text = _preceding_text(link)
        if date_text is None:
            result.diagnostics.append(ParseDiagnostic(position, href, "no date text before link"))
            continue

        result.entries.append(RawLicenseEntry(
            key_text=extract_key(href, key_prefix, key_suffix),
            date_text=date_text,
        ))

    logger.debug(
        "Parsed license page: %d entries, %d skipped links",
        len(result.entries), len(result.diagnostics)
    )
    return result
