#!/usr/bin/env python3

"""Tuning knobs for DWARF resolution and scanning."""

import os
from typing import Any

# Default configuration values
DEFAULT_CONFIG: dict[str, Any] = {
    # Width recorded on Pointer and Const types (64-bit target assumption)
    "POINTER_SIZE": 8,
    # Longest type chain the declaration formatter peels before giving up
    "MAX_PEEL_DEPTH": 16,
    # Log an INFO progress line every N units during the struct scan
    "PROGRESS_EVERY_CUS": 100,
}


def get_config() -> dict[str, Any]:
    """Get configuration with environment variable overrides.

    Every key can be overridden by a ``DWARF_<KEY>`` environment variable.
    Values that do not parse as the default's type are ignored.

    Returns:
        Configuration dictionary
    """
    config = DEFAULT_CONFIG.copy()

    for key in config:
        env_value = os.getenv(f"DWARF_{key}")
        if env_value is None:
            continue

        if isinstance(config[key], bool):
            config[key] = env_value.lower() in ("true", "1", "yes", "on")
        elif isinstance(config[key], int):
            try:
                config[key] = int(env_value)
            except ValueError:
                pass
        else:
            config[key] = env_value

    return config
