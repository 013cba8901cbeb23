from pathlib import Path

import pytest
import yaml

from shut.configuration.app_configuration import (
    DEFAULT_WARNING_LIFETIME_SECONDS,
    DEFAULT_WARNING_MESSAGE,
    AppConfig,
)


@pytest.fixture()
def config_path(tmp_path: Path) -> Path:
    return tmp_path / "app_config.yml"


def test_app_config_reload_parses_yaml(config_path: Path, tmp_path: Path) -> None:
    config_payload = {
        "database": {"path": str(tmp_path / "db" / "shut.sqlite")},
        "moderation": {
            "warning_lifetime_seconds": 5,
            "warning_message": "{mention} media only!",
        },
    }
    config_path.write_text(yaml.safe_dump(config_payload), encoding="utf-8")

    config = AppConfig(config_path)

    assert config.database_path == (tmp_path / "db" / "shut.sqlite").resolve()
    assert config.warning_lifetime_seconds == pytest.approx(5.0)
    assert config.warning_message == "{mention} media only!"


def test_app_config_missing_file_returns_defaults(tmp_path: Path) -> None:
    config = AppConfig(tmp_path / "does_not_exist.yml")

    assert config.database_path == Path("./data/settings.sqlite").resolve()
    assert config.warning_lifetime_seconds == DEFAULT_WARNING_LIFETIME_SECONDS
    assert config.warning_message == DEFAULT_WARNING_MESSAGE


@pytest.mark.parametrize("value", ["soon", -1, None])
def test_app_config_invalid_lifetime_falls_back(config_path: Path, value) -> None:
    config_path.write_text(yaml.safe_dump({"moderation": {"warning_lifetime_seconds": value}}), encoding="utf-8")

    assert AppConfig(config_path).warning_lifetime_seconds == DEFAULT_WARNING_LIFETIME_SECONDS


def test_app_config_non_mapping_is_ignored(config_path: Path) -> None:
    config_path.write_text("- just\n- a list\n", encoding="utf-8")

    config = AppConfig(config_path)

    assert config.warning_message == DEFAULT_WARNING_MESSAGE


def test_app_config_reload_picks_up_changes(config_path: Path) -> None:
    config_path.write_text(yaml.safe_dump({"moderation": {"warning_lifetime_seconds": 1}}), encoding="utf-8")
    config = AppConfig(config_path)
    assert config.warning_lifetime_seconds == 1.0

    config_path.write_text(yaml.safe_dump({"moderation": {"warning_lifetime_seconds": 2}}), encoding="utf-8")
    config.reload()

    assert config.warning_lifetime_seconds == 2.0
