"""
System, Health, and Version information routes for the trial license provider.
"""

import logging
from datetime import datetime
from fastapi import APIRouter

from version import __version__
from api_models import API_VERSION, HealthResponse
from services import ProviderNotConfiguredError, get_resolver

logger = logging.getLogger(__name__)

system_app_router = APIRouter(tags=["General"])


@system_app_router.get("/api")
async def api_info():
    """API information endpoint."""
    return {
        "name": "Trial License Provider API",
        "version": __version__,
        "api_version": API_VERSION,
        "description": "Valid trial licenses read from the license directory page",
        "docs": "/docs",
        "health": "/health",
        "licenses": "/api/licenses",
    }


@system_app_router.get("/api/version")
async def api_version():
    """Get detailed version information."""
    return {
        "server_version": __version__,
        "api_version": API_VERSION,
    }


@system_app_router.get("/health", response_model=HealthResponse)
async def health_check():
    """Report API status and the state of the license catalog.

    Never fetches the page: an empty or stale cache is reported as such.
    """
    timestamp = datetime.utcnow().isoformat()
    try:
        resolver = get_resolver()
    except ProviderNotConfiguredError as e:
        logger.warning(f"Health check: {e}")
        return HealthResponse(
            status="unconfigured",
            timestamp=timestamp,
            catalog={"status": "unconfigured"}
        )

    cache = resolver.cache
    snapshot = cache.snapshot
    if snapshot is None:
        catalog = {"status": "empty"}
    else:
        catalog = {
            "status": "fresh" if cache.is_fresh() else "stale",
            "as_of_date": snapshot.as_of_date.isoformat(),
            "licenses": len(snapshot),
            "skipped": snapshot.skipped,
            "version": snapshot.version,
        }

    return HealthResponse(status="healthy", timestamp=timestamp, catalog=catalog)
