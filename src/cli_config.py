"""Configuration overrides for runtime tunables.

Values come from an optional YAML file (``--config`` or AGI_CONFIG) and
override the defaults held in Constants. A missing or malformed file is
reported and ignored so that asdf commands keep working.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional, Tuple

import yaml

from constants import Constants

logger = logging.getLogger(__name__)

# config key -> (Constants attribute, coercion)
_TUNABLES: Dict[str, Tuple[str, type]] = {
    "pkgsite_base_url": ("PKGSITE_BASE_URL", str),
    "request_timeout": ("REQUEST_TIMEOUT", int),
    "http_retry_max": ("HTTP_RETRY_MAX", int),
    "git_timeout": ("GIT_TIMEOUT_SEC", int),
}

# Integer tunables must be at least 1
_MINIMUM = 1


def load_config_file(config_path: Optional[str]) -> Dict[str, Any]:
    """Load a YAML configuration file.

    Args:
        config_path: Path to the file; AGI_CONFIG is used when None.

    Returns:
        Configuration dict (empty when no usable file was found).
    """
    config_path = config_path or os.environ.get(Constants.ENV_CONFIG)
    if not config_path:
        return {}

    if not os.path.isfile(config_path):
        logger.warning("Config file not found: %s", config_path)
        return {}

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Failed to load config %s: %s", config_path, e)
        return {}

    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: top level is not a mapping", config_path)
        return {}
    return data


def apply_config(cfg: Dict[str, Any]) -> None:
    """Apply configuration values onto Constants.

    Unknown keys are logged at DEBUG; values that fail coercion or
    fall below 1 are logged and skipped.
    """
    for key, value in cfg.items():
        target = _TUNABLES.get(key)
        if target is None:
            logger.debug("Ignoring unknown config key: %s", key)
            continue
        attr, coerce = target
        try:
            coerced = coerce(value)
        except (TypeError, ValueError):
            logger.warning("Invalid value for config key %s: %r", key, value)
            continue
        if coerce is int and coerced < _MINIMUM:
            logger.warning("Config key %s must be at least %d, got %r", key, _MINIMUM, value)
            continue
        setattr(Constants, attr, coerced)
