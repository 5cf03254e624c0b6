"""
Pytest configuration and fixtures for the trial license provider tests.
"""

import os
import sys
from datetime import date

import pytest

# Set test environment variables before importing config
os.environ['LICENSE_PAGE_URL'] = 'http://licenses.test/index.html'
os.environ.pop('LICENSE_FETCH_TIMEOUT', None)

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from catalog_cache import CatalogCache
from clock import FixedClock
from resolver import LicenseResolver
from helpers import FakeFetcher, scenario_page

SCENARIO_TODAY = date(2024, 3, 10)


@pytest.fixture
def clock():
    """Clock frozen on the reference day 2024-03-10."""
    return FixedClock(SCENARIO_TODAY)


@pytest.fixture
def fetcher():
    """Fetcher serving the OLD/NEW reference page."""
    return FakeFetcher(scenario_page())


@pytest.fixture
def cache(fetcher, clock):
    return CatalogCache(fetcher, clock=clock)


@pytest.fixture
def resolver(cache):
    return LicenseResolver(cache)


@pytest.fixture(autouse=True)
def reset_service_singletons():
    """Make sure no provider leaks between tests."""
    import services
    services.reset_services()
    yield
    services.reset_services()
