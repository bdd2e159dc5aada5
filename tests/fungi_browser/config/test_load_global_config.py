from __future__ import annotations

import json

import pytest

from fungi_browser.config.loader import load_global_config
from fungi_browser.config.model import DEFAULT_SOURCE_URL, GlobalConfig
from fungi_browser.core.exceptions import ConfigError


def _write_global(tmp_path, data) -> None:
    (tmp_path / "global.json").write_text(json.dumps(data))


def test_load_global_config_reads_values(tmp_path, monkeypatch):
    monkeypatch.delenv("FUNGI_BROWSER_SOURCE_URL", raising=False)
    _write_global(
        tmp_path,
        {"ui_title": "Fungi", "year_min": 1900, "year_max": 2000, "display_cap": 50, "bar_chart_top_n": 5},
    )

    cfg = load_global_config(tmp_path)

    assert cfg.ui_title == "Fungi"
    assert cfg.year_domain == (1900, 2000)
    assert cfg.display_cap == 50
    assert cfg.bar_chart_top_n == 5
    # Unspecified keys fall back to defaults
    assert cfg.source_url == DEFAULT_SOURCE_URL
    assert cfg.request_timeout == GlobalConfig().request_timeout


def test_source_url_env_override(tmp_path, monkeypatch):
    _write_global(tmp_path, {})
    monkeypatch.setenv("FUNGI_BROWSER_SOURCE_URL", "http://localhost:9000/x.zip")
    assert load_global_config(tmp_path).source_url == "http://localhost:9000/x.zip"


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_global_config(tmp_path)


@pytest.mark.parametrize(
    "data",
    [
        {"year_min": 2000, "year_max": 1900},
        {"display_cap": 0},
        {"bar_chart_top_n": -1},
        {"display_cap": "lots"},
        [],
    ],
)
def test_invalid_values_raise_config_error(tmp_path, data):
    _write_global(tmp_path, data)
    with pytest.raises(ConfigError):
        load_global_config(tmp_path)


def test_invalid_json_raises_config_error(tmp_path):
    (tmp_path / "global.json").write_text("{not json")
    with pytest.raises(ConfigError):
        load_global_config(tmp_path)
