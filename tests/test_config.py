"""
Tests for configuration management.
"""

import pytest
from pydantic import ValidationError

from config import (
    CatalogConfig,
    APIConfig,
    AppConfig,
    get_config,
    reload_config
)
from page_parser import DEFAULT_KEY_PREFIX, DEFAULT_KEY_SUFFIX


class TestCatalogConfig:
    """Tests for CatalogConfig."""

    def test_values_from_environment(self):
        """The test environment sets LICENSE_PAGE_URL."""
        config = CatalogConfig()
        assert config.page_url == 'http://licenses.test/index.html'
        assert config.is_configured
        assert config.key_prefix == DEFAULT_KEY_PREFIX
        assert config.key_suffix == DEFAULT_KEY_SUFFIX
        assert config.fetch_timeout is None

    def test_blank_url_means_unconfigured(self):
        config = CatalogConfig(page_url='   ')
        assert config.page_url is None
        assert not config.is_configured

    def test_invalid_url(self):
        with pytest.raises(ValidationError):
            CatalogConfig(page_url='file:///etc/passwd')

    def test_invalid_timeout(self):
        with pytest.raises(ValidationError):
            CatalogConfig(fetch_timeout=0)

    def test_timeout_from_env(self, monkeypatch):
        monkeypatch.setenv('LICENSE_FETCH_TIMEOUT', '12.5')
        assert CatalogConfig().fetch_timeout == 12.5


class TestAPIConfig:
    """Tests for APIConfig."""

    def test_default_values(self, monkeypatch):
        monkeypatch.delenv('API_PORT', raising=False)
        config = APIConfig()
        assert config.host == '0.0.0.0'
        assert config.port == 3000
        assert config.log_level == 'info'
        assert config.cors_origins == ['*']

    def test_invalid_port(self):
        with pytest.raises(ValidationError):
            APIConfig(port=70000)

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            APIConfig(log_level='verbose')


class TestAppConfig:
    """Tests for AppConfig."""

    def test_load(self):
        config = AppConfig.load()
        assert config.catalog.is_configured
        assert config.api.port > 0

    def test_settings_are_the_ones_the_app_reads(self):
        assert set(AppConfig.model_fields) == {'debug', 'verbose', 'log_file', 'catalog', 'api'}
        assert set(APIConfig.model_fields) == {'host', 'port', 'log_level', 'cors_origins'}

    def test_global_config(self, monkeypatch):
        first = get_config()
        assert get_config() is first

        monkeypatch.setenv('LICENSE_PAGE_URL', 'https://other.test/licenses')
        reloaded = reload_config()
        assert reloaded is not first
        assert reloaded.catalog.page_url == 'https://other.test/licenses'
        assert get_config() is reloaded

        monkeypatch.undo()
        reload_config()
