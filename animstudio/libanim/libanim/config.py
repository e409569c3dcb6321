"""
Decode options and YAML config loading.
"""

from __future__ import annotations

import logging
import os
from dataclasses import asdict, dataclass

import yaml

logger = logging.getLogger(__name__)

# Default configuration values
DEFAULTS = {
    "uv_scale": 4096.0,
    "max_array_count": 0,  # 0 = unlimited
    "read_chunk_size": 1 << 20,
    "warn_on_material_collision": True,
}


@dataclass(frozen=True)
class DecodeOptions:
    uv_scale: float = DEFAULTS["uv_scale"]
    max_array_count: int = DEFAULTS["max_array_count"]
    read_chunk_size: int = DEFAULTS["read_chunk_size"]
    warn_on_material_collision: bool = DEFAULTS["warn_on_material_collision"]

    def to_dict(self) -> dict:
        return asdict(self)


DEFAULT_OPTIONS = DecodeOptions()


def load_config(config_path: str) -> DecodeOptions:
    """Load a YAML config file, fill missing keys with defaults, and validate."""
    if not os.path.isfile(config_path):
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        try:
            cfg = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Config file {config_path} is not valid YAML: {e}") from e

    if not isinstance(cfg, dict):
        raise ValueError(f"Config root must be a mapping, got {type(cfg).__name__}")

    unknown = sorted(set(cfg) - set(DEFAULTS))
    if unknown:
        raise ValueError(f"Unknown config keys: {unknown}. Choose from: {list(DEFAULTS)}")

    # Fill defaults for missing keys
    for key, default_val in DEFAULTS.items():
        if key not in cfg:
            cfg[key] = default_val
            logger.debug("Config key '%s' not found, using default: %s", key, default_val)

    _validate_config(cfg)
    return DecodeOptions(
        uv_scale=float(cfg["uv_scale"]),
        max_array_count=cfg["max_array_count"],
        read_chunk_size=cfg["read_chunk_size"],
        warn_on_material_collision=cfg["warn_on_material_collision"],
    )


def _validate_config(cfg: dict) -> None:
    """Validate configuration values."""
    if isinstance(cfg["uv_scale"], bool) or not isinstance(cfg["uv_scale"], (int, float)):
        raise ValueError(f"'uv_scale' must be a number, got {cfg['uv_scale']!r}")

    for key in ["max_array_count", "read_chunk_size"]:
        if isinstance(cfg[key], bool) or not isinstance(cfg[key], int):
            raise ValueError(f"'{key}' must be an integer, got {cfg[key]!r}")

    if not isinstance(cfg["warn_on_material_collision"], bool):
        raise ValueError(
            f"'warn_on_material_collision' must be true or false, got {cfg['warn_on_material_collision']!r}"
        )

    if cfg["uv_scale"] <= 0:
        raise ValueError(f"'uv_scale' must be positive, got {cfg['uv_scale']}")

    if cfg["max_array_count"] < 0:
        raise ValueError(
            f"'max_array_count' must be >= 0 (0 disables the limit), got {cfg['max_array_count']}"
        )

    if cfg["read_chunk_size"] <= 0:
        raise ValueError(f"'read_chunk_size' must be positive, got {cfg['read_chunk_size']}")
