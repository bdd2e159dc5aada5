from __future__ import annotations

import json
import logging
import os
from dataclasses import replace
from pathlib import Path

from fungi_browser.config.model import GlobalConfig
from fungi_browser.core.exceptions import ConfigError

logger = logging.getLogger(__name__)


def _validate(cfg: GlobalConfig) -> GlobalConfig:
    if cfg.year_min > cfg.year_max:
        raise ConfigError(f"year_min ({cfg.year_min}) is greater than year_max ({cfg.year_max})")
    if cfg.display_cap <= 0:
        raise ConfigError(f"display_cap must be positive, got {cfg.display_cap}")
    if cfg.bar_chart_top_n <= 0:
        raise ConfigError(f"bar_chart_top_n must be positive, got {cfg.bar_chart_top_n}")
    if cfg.request_timeout <= 0:
        raise ConfigError(f"request_timeout must be positive, got {cfg.request_timeout}")
    if cfg.max_sessions <= 0:
        raise ConfigError(f"max_sessions must be positive, got {cfg.max_sessions}")
    return cfg


def load_global_config(root: Path) -> GlobalConfig:
    """
    Load configuration from a directory.

    Expected structure:

        root/
            global.json

    Missing keys fall back to GlobalConfig defaults. FUNGI_BROWSER_SOURCE_URL,
    when set, overrides source_url (handy for mirrors and local test servers).

    :param root: Directory containing 'global.json'.
    :return: A validated GlobalConfig instance.
    :raises FileNotFoundError: if global.json does not exist.
    :raises ConfigError: if the file is not valid JSON or values are inconsistent.
    """
    logger.info(
        "Loading global config",
        extra={"config_root": str(root)},
    )

    global_path = Path(root) / "global.json"
    if not global_path.is_file():
        raise FileNotFoundError(f"File not found at {global_path}")

    try:
        with global_path.open() as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {global_path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"{global_path} must contain a JSON object")

    try:
        cfg = GlobalConfig.from_raw(raw)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid value in {global_path}: {e}") from e

    source_override = os.environ.get("FUNGI_BROWSER_SOURCE_URL")
    if source_override:
        cfg = replace(cfg, source_url=source_override)

    return _validate(cfg)
