"""Configuration for the suggestion and danger components."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

ENV_PREFIX = "MAGIC_GUARD_"
CONFIG_ENV_VAR = "MAGIC_GUARD_CONFIG"


@dataclass
class MagicConfig:
    """Tunable settings shared by all components.

    The defaults reproduce the established scoring behaviour; only the two
    switches at the bottom change results.
    """

    # Command suggestion
    command_threshold: float = 0.70

    # Path suggestion
    path_min_score: float = 0.18
    path_scan_limit: int = 32
    path_max_suggestions: int = 16
    path_max_length: int = 511
    report_max_sets: int = 8

    # Token recovery
    auto_apply_threshold: float = 0.80
    token_capacity: int = 255

    # Danger analysis
    large_size_bytes: int = 10 * 1024 * 1024
    recent_window_seconds: int = 24 * 3600
    report_max_items: int = 8

    # Switches
    exact_token_overlap: bool = False
    size_walk_max_depth: int = 64

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MagicConfig:
        """Build a config from a mapping, ignoring unknown keys."""
        config = cls()
        config.update(data)
        return config

    def update(self, data: dict[str, Any]) -> None:
        """Apply known keys from a mapping, coercing to the field's type."""
        known = {f.name: type(getattr(self, f.name)) for f in fields(self)}
        for key, value in data.items():
            if key not in known:
                logger.warning(f"Ignoring unknown config key: {key}")
                continue
            try:
                setattr(self, key, _coerce(known[key], value))
            except (TypeError, ValueError) as e:
                logger.warning(f"Invalid value for {key}: {value!r} ({e})")

    def to_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def load(
        cls,
        path: str | Path | None = None,
        environ: dict[str, str] | None = None,
    ) -> MagicConfig:
        """Load configuration from defaults, a JSON file and the environment.

        Args:
            path: JSON config file; falls back to $MAGIC_GUARD_CONFIG
            environ: Environment mapping (defaults to os.environ)

        Returns:
            Loaded configuration
        """
        env = os.environ if environ is None else environ
        config = cls()

        config_path = path or env.get(CONFIG_ENV_VAR)
        if config_path:
            config.update(_read_config_file(Path(config_path)))

        overrides = {
            key[len(ENV_PREFIX):].lower(): value
            for key, value in env.items()
            if key.startswith(ENV_PREFIX) and key != CONFIG_ENV_VAR
        }
        if overrides:
            config.update(overrides)

        return config


def _read_config_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        logger.warning(f"Config file not found: {path}")
        return {}

    try:
        with open(path) as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Failed to load config file {path}: {e}")
        return {}

    if not isinstance(data, dict):
        logger.warning(f"Config file {path} must contain a JSON object")
        return {}

    logger.debug(f"Loaded config file: {path}")
    return data


def _coerce(kind: type, value: Any) -> Any:
    if kind is bool:
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in ("1", "true", "yes", "on"):
            return True
        if text in ("0", "false", "no", "off"):
            return False
        raise ValueError("expected a boolean")
    return kind(value)
