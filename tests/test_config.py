"""Tests for environment configuration."""

import logging
from pathlib import Path

import pytest

from config import DEFAULT_DATABASE_PATH, Config, ConfigError


def test_defaults_without_environment() -> None:
    config = Config.from_env({})

    assert config.database_path == DEFAULT_DATABASE_PATH
    assert config.storage_key == "foodItems"
    assert config.log_level == logging.WARNING
    assert config.port == 5001


def test_reads_environment_overrides(tmp_path) -> None:
    config = Config.from_env({
        "CALORIE_TRACKER_DB": str(tmp_path / "db.sqlite"),
        "CALORIE_TRACKER_KEY": "myFoods",
        "CALORIE_TRACKER_LOG_LEVEL": "debug",
        "PORT": "8080",
    })

    assert config.database_path == Path(tmp_path / "db.sqlite")
    assert config.storage_key == "myFoods"
    assert config.log_level == logging.DEBUG
    assert config.port == 8080


@pytest.mark.parametrize(
    "environ",
    [
        {"CALORIE_TRACKER_KEY": "  "},
        {"CALORIE_TRACKER_LOG_LEVEL": "LOUD"},
        {"PORT": "eighty"},
    ],
)
def test_rejects_invalid_values(environ) -> None:
    with pytest.raises(ConfigError):
        Config.from_env(environ)
