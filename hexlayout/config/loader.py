"""YAML loading for :class:`LayoutConfig`."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import ValidationError
import yaml

from hexlayout.config.models import LayoutConfig
from hexlayout.exceptions import LayoutConfigError

DEFAULT_CONFIG_PATH = Path(__file__).with_name("layout.yaml")


def build_layout_config(overrides: dict[str, Any] | None = None, **kwargs: Any) -> LayoutConfig:
    """Build a validated config from a mapping plus keyword overrides.

    Example:
        build_layout_config({"bucket_count": 11}, rank_key="usage_time")
    """
    data = dict(overrides or {})
    data.update(kwargs)
    if "hidden_keys" in data and data["hidden_keys"] is not None:
        data["hidden_keys"] = frozenset(data["hidden_keys"])
    try:
        return LayoutConfig(**data)
    except ValidationError as e:
        raise LayoutConfigError(f"Invalid layout config: {e}") from e


def load_layout_config(path: str | Path | None = None, **overrides: Any) -> LayoutConfig:
    """Load a YAML config file (the bundled default when ``path`` is None)."""
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as e:
        raise LayoutConfigError(f"Failed to read config {config_path}: {e}") from e

    if not isinstance(raw, dict):
        raise LayoutConfigError(
            f"Config {config_path} must be a mapping, got {type(raw).__name__}"
        )

    section = raw.get("layout", raw)
    config = build_layout_config(section, **overrides)
    logger.debug("Loaded layout config from {}: {}", config_path, config)
    return config
