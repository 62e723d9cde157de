from __future__ import annotations

import importlib
import json
import os
import sys

import pytest


def _load_settings():
    sys.modules.pop("settings", None)
    return importlib.import_module("settings")


@pytest.fixture(autouse=True)
def _forget_settings():
    yield
    sys.modules.pop("settings", None)


def test_config_path_from_environment(tmp_path, monkeypatch) -> None:
    config_path = tmp_path / "conf" / "explbot.json"
    config_path.parent.mkdir()
    config_path.write_text(
        json.dumps(
            {
                "database": {"path": "data/expl.db"},
                "expl": {"time_zone": "Europe/Berlin", "max_results": 10},
                "responses": {"parse_mode": "markdown"},
            }
        ),
        encoding="utf-8",
    )
    monkeypatch.setenv("EXPLBOT_CONFIG", str(config_path))

    settings = _load_settings()

    assert settings.CONFIG_PATH == str(config_path)
    assert settings.DB_PATH == os.path.join(str(config_path.parent), "data", "expl.db")
    assert settings.TIME_ZONE == "Europe/Berlin"
    assert settings.EXPL_CONFIG.max_results == 10
    assert settings.EXPL_CONFIG.max_term_units == 50
    assert settings.PARSE_MODE == "markdown"


def test_missing_config_names_the_override(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("EXPLBOT_CONFIG", str(tmp_path / "absent.json"))
    with pytest.raises(FileNotFoundError, match="EXPLBOT_CONFIG"):
        _load_settings()
