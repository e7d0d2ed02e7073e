"""
Name: Settings Tests

Responsibilities:
  - DATABASE_URL assembly from DB_* vars
  - Production security requirements
  - Environment helpers
"""

import pytest
from olidesk.crosscutting.config import Settings
from pydantic import ValidationError

pytestmark = pytest.mark.unit

STRONG_SECRET = "x" * 40


def test_database_url_wins_when_present():
    settings = Settings(database_url=" postgresql://u:p@db/olidesk ")
    assert settings.get_database_url() == "postgresql://u:p@db/olidesk"


def test_database_url_assembled_from_parts():
    settings = Settings(
        database_url="",
        db_host="db",
        db_port=5433,
        db_user="olidesk",
        db_password="p@ss word",
        db_name="crm",
        db_ssl_mode="require",
    )

    assert settings.get_database_url() == (
        "postgresql://olidesk:p%40ss%20word@db:5433/crm?sslmode=require"
    )


def test_allowed_origins_list():
    settings = Settings(allowed_origins="http://a.com, http://b.com,,")
    assert settings.get_allowed_origins_list() == ["http://a.com", "http://b.com"]


@pytest.mark.parametrize("secret", ["", "changeme", "short-secret"])
def test_production_rejects_weak_secrets(secret):
    with pytest.raises(ValidationError):
        Settings(app_env="production", jwt_secret=secret)


def test_production_rejects_dev_seed():
    with pytest.raises(ValidationError):
        Settings(app_env="production", jwt_secret=STRONG_SECRET, dev_seed_user=True)


def test_production_accepts_strong_secret():
    settings = Settings(app_env="production", jwt_secret=STRONG_SECRET)
    assert settings.is_production()
    assert not settings.is_test()


def test_pool_bounds_validated():
    with pytest.raises(ValidationError):
        Settings(db_pool_min_size=20, db_pool_max_size=5)


def test_test_environment_aliases():
    for env in ("test", "testing", "CI"):
        assert Settings(app_env=env).is_test()


def test_database_url_without_password():
    settings = Settings(database_url="", db_user="olidesk", db_password="", db_name="crm")
    assert settings.get_database_url().startswith("postgresql://olidesk@")


def test_development_tolerates_weak_secret_and_dev_seed():
    settings = Settings(app_env="local", jwt_secret="changeme", dev_seed_user=True)
    assert not settings.is_production()


@pytest.mark.parametrize("secret", ["  " + "y" * 31 + "  ", "secret"])
def test_production_strips_secret_before_length_check(secret):
    with pytest.raises(ValidationError):
        Settings(app_env="production", jwt_secret=secret)


@pytest.mark.parametrize(
    "overrides",
    [
        {"db_pool_min_size": -1},
        {"db_pool_max_size": 0},
        {"port": 0},
        {"port": 70000},
        {"geocoding_timeout_seconds": 0},
        {"retry_max_attempts": 0},
    ],
)
def test_out_of_range_values_rejected(overrides):
    with pytest.raises(ValidationError):
        Settings(**overrides)
