"""
Shared service instances for the trial license provider API.
"""

import logging
from typing import Optional

from catalog_cache import CatalogCache
from clock import SystemClock
from config import AppConfig, get_config
from fetcher import PageFetcher
from resolver import LicenseResolver

logger = logging.getLogger(__name__)

# Singleton for the process-wide license provider
resolver: Optional[LicenseResolver] = None


class ProviderNotConfiguredError(RuntimeError):
    """No license page URL is configured."""
    pass


def build_resolver(config: AppConfig) -> LicenseResolver:
    """Wire fetcher, clock, cache and resolver from configuration."""
    catalog = config.catalog
    if not catalog.is_configured:
        raise ProviderNotConfiguredError("The url of the license page is mandatory")

    fetcher = PageFetcher(catalog.page_url, timeout=catalog.fetch_timeout)
    cache = CatalogCache(
        fetcher,
        clock=SystemClock(),
        key_prefix=catalog.key_prefix,
        key_suffix=catalog.key_suffix,
    )
    logger.info("License provider configured for %s", catalog.page_url)
    return LicenseResolver(cache)


def get_resolver() -> LicenseResolver:
    """Get or create singleton resolver instance."""
    global resolver
    if resolver is None:
        resolver = build_resolver(get_config())
    return resolver


def set_resolver(instance: LicenseResolver) -> None:
    """Install a resolver (used by bootstrap and tests)."""
    global resolver
    resolver = instance


def reset_services():
    """Reset service singletons (primarily for testing)."""
    global resolver
    resolver = None
