"""Values asdf passes to plugin commands through the environment.

See https://asdf-vm.com/plugins/create.html#environment-variables-overview
Not every variable is set for every command; unset ones are None.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PluginEnv:
    """Plain values from the asdf environment, treated as trusted input."""
    data_dir: str
    plugin_name: Optional[str] = None
    install_version: Optional[str] = None
    install_path: Optional[str] = None
    download_path: Optional[str] = None


def _get(environ: Mapping[str, str], key: str) -> Optional[str]:
    value = environ.get(key)
    return value if value else None


def load_env(environ: Optional[Mapping[str, str]] = None) -> PluginEnv:
    """Read the asdf variables from environ (defaults to os.environ)."""
    environ = os.environ if environ is None else environ

    data_dir = os.path.expanduser(_get(environ, Constants.ENV_DATA_DIR) or Constants.DEFAULT_DATA_DIR)
    plugin_path = _get(environ, Constants.ENV_PLUGIN_PATH)
    plugin_name = os.path.basename(plugin_path.rstrip(os.sep)) if plugin_path else None

    env = PluginEnv(
        data_dir=data_dir,
        plugin_name=plugin_name or None,
        install_version=_get(environ, Constants.ENV_INSTALL_VERSION),
        install_path=_get(environ, Constants.ENV_INSTALL_PATH),
        download_path=_get(environ, Constants.ENV_DOWNLOAD_PATH),
    )
    if is_debug_enabled(logger):
        logger.debug(
            "Resolved environment",
            extra=extra_context(
                event="env",
                component="env",
                data_dir=env.data_dir,
                plugin_name=env.plugin_name,
                install_version=env.install_version,
            ),
        )
    return env
