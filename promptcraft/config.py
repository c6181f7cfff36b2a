"""Global configuration: engine constants and environment-driven settings."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping

from pydantic import BaseModel

logger = logging.getLogger(__name__)

# Allowed spacing tokens, in pixels, ascending.
SPACING_SCALE: tuple[int, ...] = (0, 4, 8, 12, 16, 24, 32)

# Base grid used to break ties when snapping to the spacing scale.
SPACING_BASE_GRID = 8

# Confidence weights for the parser score (must sum to 1.0).
INTENT_WEIGHT = 0.4
KIND_WEIGHT = 0.4
DIMENSION_WEIGHT = 0.2

# Cap applied when no intent rule matches.
UNKNOWN_CONFIDENCE_CAP = 0.45

# Confidence of a fully matched QUERY prompt.
QUERY_CONFIDENCE = 0.6

# Penalty subtracted from the overall confidence for each degraded stage.
FALLBACK_PENALTY = 0.1

# Counts up to this value expand into separate sibling nodes.
MAX_EXPANDED_INSTANCES = 8

# Containment deeper than this is read as a flat list of siblings.
MAX_NESTING_DEPTH = 32

DEFAULT_DEVICE_KEY = "iphone-15"

# All known configuration keys with defaults
_CONFIG_KEYS: dict[str, dict[str, str]] = {
    "PROMPTCRAFT_ENV": {"default": "development", "description": "Environment profile"},
    "PROMPTCRAFT_LOG_LEVEL": {"default": "INFO", "description": "Logging level"},
    "PROMPTCRAFT_DEFAULT_DEVICE": {
        "default": DEFAULT_DEVICE_KEY,
        "description": "Device preset used when no context supplies one",
    },
    "PROMPTCRAFT_PARALLEL_STAGES": {
        "default": "false",
        "description": "Run context resolution and style inference concurrently",
    },
}

_PROFILES: dict[str, dict[str, str]] = {
    "development": {
        "PROMPTCRAFT_LOG_LEVEL": "DEBUG",
    },
    "production": {
        "PROMPTCRAFT_LOG_LEVEL": "WARNING",
        "PROMPTCRAFT_PARALLEL_STAGES": "true",
    },
    "testing": {
        "PROMPTCRAFT_LOG_LEVEL": "DEBUG",
        "PROMPTCRAFT_PARALLEL_STAGES": "false",
    },
}

_TRUTHY = {"1", "true", "yes", "on"}


class EngineSettings(BaseModel):
    """Resolved engine settings."""

    env: str = "development"
    log_level: str = "INFO"
    default_device: str = DEFAULT_DEVICE_KEY
    parallel_stages: bool = False


def load_settings(environ: Mapping[str, str] | None = None) -> EngineSettings:
    """Load merged settings: defaults -> profile -> environment variables.

    Parameters
    ----------
    environ:
        Mapping to read variables from.  Defaults to ``os.environ``.
    """
    environ = os.environ if environ is None else environ
    config: dict[str, str] = {key: info["default"] for key, info in _CONFIG_KEYS.items()}

    env_name = environ.get("PROMPTCRAFT_ENV", config["PROMPTCRAFT_ENV"])
    config["PROMPTCRAFT_ENV"] = env_name
    profile = _PROFILES.get(env_name)
    if profile is None:
        logger.warning("Unknown environment profile %r; using defaults", env_name)
    else:
        config.update(profile)

    for key in _CONFIG_KEYS:
        value = environ.get(key)
        if value is not None:
            config[key] = value

    # Imported here to keep config importable from the preset tables.
    from promptcraft.context.presets import DEVICE_PRESETS

    device = config["PROMPTCRAFT_DEFAULT_DEVICE"].strip().lower()
    if device not in DEVICE_PRESETS:
        logger.warning("Unknown default device %r; falling back to %s", device, DEFAULT_DEVICE_KEY)
        device = DEFAULT_DEVICE_KEY

    return EngineSettings(
        env=env_name,
        log_level=config["PROMPTCRAFT_LOG_LEVEL"].upper(),
        default_device=device,
        parallel_stages=config["PROMPTCRAFT_PARALLEL_STAGES"].strip().lower() in _TRUTHY,
    )


def configure_logging(settings: EngineSettings) -> None:
    """Apply the configured level to the ``promptcraft`` logger hierarchy."""
    level = logging.getLevelName(settings.log_level)
    if not isinstance(level, int):
        logger.warning("Invalid log level %r; using INFO", settings.log_level)
        level = logging.INFO
    logging.getLogger("promptcraft").setLevel(level)
