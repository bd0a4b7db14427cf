"""
Tests for environment configuration.
"""

import pytest

from learnpath.config import ProductionConfig, _database_url


class TestProductionConfig:
    def test_requires_database_url(self, monkeypatch):
        monkeypatch.setattr(ProductionConfig, "SQLALCHEMY_DATABASE_URI", None)
        monkeypatch.setenv("SECRET_KEY", "prod-secret")
        with pytest.raises(RuntimeError, match="DATABASE_URL"):
            ProductionConfig()

    def test_requires_secret_key(self, monkeypatch):
        monkeypatch.setattr(ProductionConfig, "SQLALCHEMY_DATABASE_URI", "postgresql://db/learnpath")
        monkeypatch.delenv("SECRET_KEY", raising=False)
        with pytest.raises(RuntimeError, match="SECRET_KEY"):
            ProductionConfig()

    def test_starts_when_configured(self, monkeypatch):
        monkeypatch.setattr(ProductionConfig, "SQLALCHEMY_DATABASE_URI", "postgresql://db/learnpath")
        monkeypatch.setenv("SECRET_KEY", "prod-secret")
        assert ProductionConfig().RATELIMIT_DEFAULT == "100 per 15 minutes"


def test_heroku_style_url_is_rewritten(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgres://user@host/learnpath")
    assert _database_url() == "postgresql://user@host/learnpath"


def test_database_url_falls_back(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    assert _database_url("sqlite://") == "sqlite://"
