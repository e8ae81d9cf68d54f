from __future__ import annotations

import pytest

from dashboard.core.config import _build_config, normalize_database_url, split_ssl_mode
from dashboard.core.exceptions import ConfigurationError


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "DATABASE_URL",
        "POSTGRES_URL",
        "DATABASE_SSL",
        "DB_POOL_SIZE",
        "DB_MAX_OVERFLOW",
        "REVENUE_FETCH_DELAY_SECONDS",
        "DEBUG",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("postgres://u:p@db.example.com/app", "postgresql+asyncpg://u:p@db.example.com/app"),
        ("postgresql://u:p@db.example.com:5432/app", "postgresql+asyncpg://u:p@db.example.com:5432/app"),
        ("postgresql+asyncpg://u:p@db.example.com/app", "postgresql+asyncpg://u:p@db.example.com/app"),
        ("sqlite:///./dashboard.db", "sqlite+aiosqlite:///./dashboard.db"),
    ],
)
def test_normalize_database_url_targets_async_drivers(raw, expected):
    assert normalize_database_url(raw) == expected


def test_normalize_database_url_rejects_other_engines():
    with pytest.raises(ConfigurationError):
        normalize_database_url("mysql://u:p@db.example.com/app")


def test_postgres_url_is_used_when_database_url_is_unset(clean_env):
    clean_env.setenv("POSTGRES_URL", "postgres://u:p@db.example.com:5432/app")

    config = _build_config("development")

    assert config.DATABASE_URL == "postgresql+asyncpg://u:p@db.example.com:5432/app"
    assert config.DATABASE_SSL == "require"


def test_revenue_delay_defaults_depend_on_environment(clean_env):
    clean_env.setenv("DATABASE_URL", "postgresql://u:p@db.example.com/app")

    assert _build_config("development").REVENUE_FETCH_DELAY_SECONDS == 3.0
    assert _build_config("production").REVENUE_FETCH_DELAY_SECONDS == 0.0


def test_production_rejects_sqlite(clean_env):
    clean_env.setenv("DATABASE_URL", "sqlite:///./dashboard.db")

    with pytest.raises(ConfigurationError, match="PostgreSQL"):
        _build_config("production")


def test_production_requires_encrypted_transport(clean_env):
    clean_env.setenv("DATABASE_URL", "postgresql://u:p@db.example.com/app")
    clean_env.setenv("DATABASE_SSL", "disable")

    with pytest.raises(ConfigurationError, match="encrypted"):
        _build_config("production")


def test_postgres_url_requires_hostname(clean_env):
    clean_env.setenv("DATABASE_URL", "postgresql:///app")

    with pytest.raises(ConfigurationError, match="hostname"):
        _build_config("development")


def test_normalize_database_url_strips_sslmode_and_keeps_other_params():
    url = normalize_database_url("postgres://u:p@db.example.com/app?sslmode=require&application_name=dash")

    assert url == "postgresql+asyncpg://u:p@db.example.com/app?application_name=dash"


def test_sslmode_in_url_feeds_database_ssl(clean_env):
    clean_env.setenv("POSTGRES_URL", "postgres://u:p@db.example.com/app?sslmode=verify-full")

    config = _build_config("production")

    assert config.DATABASE_URL == "postgresql+asyncpg://u:p@db.example.com/app"
    assert config.DATABASE_SSL == "verify-full"


def test_explicit_database_ssl_wins_over_url(clean_env):
    clean_env.setenv("DATABASE_URL", "postgresql://u:p@db.example.com/app?ssl=true")
    clean_env.setenv("DATABASE_SSL", "verify-ca")

    assert _build_config("development").DATABASE_SSL == "verify-ca"


def test_ssl_flag_in_url_maps_to_mode():
    assert split_ssl_mode("postgresql://u:p@h/app?ssl=true") == ("postgresql://u:p@h/app", "require")
    assert split_ssl_mode("postgresql://u:p@h/app?ssl=0") == ("postgresql://u:p@h/app", "disable")
    assert split_ssl_mode("sqlite:///:memory:") == ("sqlite:///:memory:", None)


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("DB_POOL_SIZE", "ten"),
        ("DB_MAX_OVERFLOW", "2.5"),
        ("REVENUE_FETCH_DELAY_SECONDS", "soon"),
    ],
)
def test_non_numeric_settings_raise_configuration_error(clean_env, name, value):
    clean_env.setenv("DATABASE_URL", "postgresql://u:p@db.example.com/app")
    clean_env.setenv(name, value)

    with pytest.raises(ConfigurationError, match=name):
        _build_config("development")


def _capture_engine_kwargs(monkeypatch) -> dict:
    import dashboard.database.db as db_module

    captured: dict = {}

    def _fake_create_async_engine(url, **kwargs):
        captured["url"] = url
        captured.update(kwargs)
        return object()

    monkeypatch.setattr(db_module, "create_async_engine", _fake_create_async_engine)
    return captured


def test_postgres_engine_requires_tls_by_default(monkeypatch):
    import dashboard.database.db as db_module

    captured = _capture_engine_kwargs(monkeypatch)

    db_module._build_engine("postgresql+asyncpg://u:p@db.example.com/app")

    assert captured["connect_args"] == {"ssl": "require"}
    assert captured["pool_pre_ping"] is True


def test_postgres_engine_uses_sslmode_from_url(monkeypatch):
    import dashboard.database.db as db_module

    captured = _capture_engine_kwargs(monkeypatch)

    db_module._build_engine("postgresql+asyncpg://u:p@db.example.com/app", ssl_mode="verify-full")

    assert captured["connect_args"] == {"ssl": "verify-full"}
