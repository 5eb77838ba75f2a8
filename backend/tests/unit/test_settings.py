"""Unit tests for configuration and service wiring"""

import io
import json
import logging

import pytest
from pydantic import ValidationError

from catalog.dependencies import build_catalog_service, configure_catalog_logging
from config import Settings, get_settings
from domain.notifications import LoanActivitySubscriber


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestSettings:

    def test_defaults(self, monkeypatch):
        for name in ("DATABASE_URL", "DEFAULT_LOAN_DAYS", "LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.DATABASE_URL == "sqlite:///./catalog.db"
        assert settings.DEFAULT_LOAN_DAYS == 14
        assert settings.LOG_LEVEL == "INFO"
        assert settings.LOG_JSON is True

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "sqlite://")
        monkeypatch.setenv("DEFAULT_LOAN_DAYS", "21")

        settings = Settings(_env_file=None)

        assert settings.DATABASE_URL == "sqlite://"
        assert settings.DEFAULT_LOAN_DAYS == 21

    @pytest.mark.parametrize("days", ["0", "400"])
    def test_loan_days_bounds(self, monkeypatch, days):
        monkeypatch.setenv("DEFAULT_LOAN_DAYS", days)
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_get_settings_cached(self):
        assert get_settings() is get_settings()


class TestBuildCatalogService:

    def test_wires_settings(self, orwell_item):
        settings = Settings(_env_file=None, DATABASE_URL="sqlite://", DEFAULT_LOAN_DAYS=7)

        with build_catalog_service(settings) as catalog:
            assert catalog.lifecycle.default_loan_days == 7
            assert len(catalog.hub) == 1
            assert isinstance(catalog.hub.subscribers[0], LoanActivitySubscriber)

            stored = catalog.admit(orwell_item)
            assert catalog.get_item(stored.id).title == "1984"

    def test_custom_subscribers(self, make_recorder, orwell_item):
        settings = Settings(_env_file=None, DATABASE_URL="sqlite://")
        recorder = make_recorder()

        with build_catalog_service(settings, subscribers=[recorder]) as catalog:
            catalog.admit(orwell_item)

        assert catalog.hub.subscribers == (recorder,)
        assert len(recorder.admitted) == 1


class TestConfigureCatalogLogging:

    def test_applies_level_and_format(self, monkeypatch):
        stream = io.StringIO()
        monkeypatch.setattr("sys.stdout", stream)
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        try:
            configure_catalog_logging(Settings(_env_file=None, LOG_LEVEL="DEBUG", LOG_JSON=True))
            logging.getLogger("catalog.test").debug("wired")
        finally:
            for handler in root.handlers[:]:
                if handler not in handlers:
                    root.removeHandler(handler)
            root.setLevel(level)
            logging.getLogger("sqlalchemy.engine").setLevel(logging.NOTSET)

        assert json.loads(stream.getvalue().strip().splitlines()[-1])["message"] == "wired"
