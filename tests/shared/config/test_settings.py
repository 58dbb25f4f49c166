# -*- coding: utf-8 -*-
"""
Tests de configuración (BaseAppSettings, loader por entorno y RazorpaySettings).

Autor: WalletSync
Fecha: 19/10/2026
"""
import pytest

from app.shared.config.config_loader import get_settings
from app.shared.config.settings_base import BaseAppSettings
from app.shared.config.settings_payments import (
    RazorpaySettings,
    get_razorpay_settings,
    reset_razorpay_settings,
)


@pytest.fixture
def fresh_loader():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestBaseAppSettings:
    def test_database_url_normalizes_postgres_scheme(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "postgres://u:p@db:5432/wallet")
        settings = BaseAppSettings(_env_file=None)
        assert settings.database_url == "postgresql+asyncpg://u:p@db:5432/wallet"

    def test_database_url_normalizes_sqlite(self, monkeypatch):
        monkeypatch.setenv("DB_URL", "sqlite:///./local.db")
        settings = BaseAppSettings(_env_file=None)
        assert settings.database_url == "sqlite+aiosqlite:///./local.db"

    def test_database_url_from_components(self, monkeypatch):
        monkeypatch.delenv("DB_URL", raising=False)
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.setenv("DB_PASSWORD", "p@ss")
        settings = BaseAppSettings(_env_file=None)
        assert settings.database_url.startswith("postgresql+asyncpg://postgres:p%40ss@")

    def test_port_and_env_aliases(self, monkeypatch):
        monkeypatch.setenv("PORT", "9090")
        monkeypatch.delenv("APP_PORT", raising=False)
        monkeypatch.delenv("PYTHON_ENV", raising=False)
        monkeypatch.setenv("NODE_ENV", "production")
        settings = BaseAppSettings(_env_file=None)
        assert settings.app_port == 9090
        assert settings.is_prod

    def test_cors_origins(self, monkeypatch):
        monkeypatch.setenv("CORS_ORIGINS", "https://a.example, 'https://b.example'")
        settings = BaseAppSettings(_env_file=None)
        assert settings.get_cors_origins() == ["https://a.example", "https://b.example"]


class TestConfigLoader:
    def test_test_environment(self, fresh_loader, monkeypatch):
        monkeypatch.setenv("PYTHON_ENV", "test")
        settings = get_settings()
        assert settings.is_test
        assert settings.database_url.startswith("sqlite+aiosqlite")

    def test_node_env_alias(self, fresh_loader, monkeypatch):
        monkeypatch.delenv("PYTHON_ENV", raising=False)
        monkeypatch.setenv("NODE_ENV", "development")
        assert get_settings().is_dev

    def test_production_rejects_sqlite(self, fresh_loader, monkeypatch):
        monkeypatch.setenv("PYTHON_ENV", "production")
        monkeypatch.setenv("DB_URL", "sqlite:///./prod.db")
        with pytest.raises(ValueError):
            get_settings()


class TestRazorpaySettings:
    def test_defaults(self, monkeypatch):
        for name in ("RAZORPAY_WEBHOOK_SECRET", "BACKEND_URL", "INTERNAL_WEBHOOK_SECRET"):
            monkeypatch.delenv(name, raising=False)
        settings = RazorpaySettings(_env_file=None)

        assert settings.webhook_secret is None
        assert settings.forward_endpoint is None
        assert settings.razorpay_minor_unit_divisor == 100
        assert settings.webhook_dedup_capacity == 1000
        assert settings.creditable_events == frozenset({"payment.captured"})
        assert settings.creditable_statuses == frozenset({"captured"})

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("RAZORPAY_WEBHOOK_SECRET", "whsec")
        monkeypatch.setenv("BACKEND_URL", " https://backend.example/ ")
        monkeypatch.setenv("BACKEND_WEBHOOK_PATH", "internal/payments")
        monkeypatch.setenv("INTERNAL_WEBHOOK_SECRET", "internal")
        settings = RazorpaySettings(_env_file=None)

        assert settings.webhook_secret == "whsec"
        assert settings.forward_secret == "internal"
        assert settings.forward_endpoint == "https://backend.example/internal/payments"

    def test_empty_secret_is_none(self):
        settings = RazorpaySettings(_env_file=None, razorpay_webhook_secret="")
        assert settings.webhook_secret is None

    def test_credit_on_authorized(self):
        settings = RazorpaySettings(_env_file=None, razorpay_credit_on_authorized=True)
        assert settings.creditable_events == frozenset({"payment.captured", "payment.authorized"})
        assert "authorized" in settings.creditable_statuses

    def test_dedup_capacity_lower_bound(self):
        with pytest.raises(ValueError):
            RazorpaySettings(_env_file=None, webhook_dedup_capacity=5)

    def test_singleton_reset(self):
        reset_razorpay_settings()
        first = get_razorpay_settings()
        assert get_razorpay_settings() is first
        reset_razorpay_settings()
        assert get_razorpay_settings() is not first
        reset_razorpay_settings()
