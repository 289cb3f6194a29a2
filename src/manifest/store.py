"""Filesystem persistence gateway for plugin manifests."""
from __future__ import annotations

import logging
import os
import tempfile

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled
from errors import ManifestNotFoundError, PersistenceError

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "manifest.json"


def plugin_dir(data_dir: str, plugin_name: str) -> str:
    """Return the top-level directory of an installed plugin."""
    return os.path.join(data_dir, Constants.PLUGINS_DIR, plugin_name)


def manifest_path(data_dir: str, plugin_name: str) -> str:
    """Return the deterministic manifest location for plugin_name."""
    return os.path.join(plugin_dir(data_dir, plugin_name), MANIFEST_FILENAME)


class FileGateway:
    """Raw byte read/write with no caching and no transactional guarantees
    beyond an atomic rename of the finished file."""

    def __init__(self, file_mode: int = Constants.MANIFEST_FILE_MODE, dir_mode: int = Constants.PLUGIN_DIR_MODE):
        self.file_mode = file_mode
        self.dir_mode = dir_mode

    def read(self, path: str) -> bytes:
        """Read the whole file at path.

        Raises:
            ManifestNotFoundError: path does not exist.
            PersistenceError: any other OS failure.
        """
        try:
            with open(path, "rb") as fh:
                return fh.read()
        except FileNotFoundError as exc:
            raise ManifestNotFoundError(f"manifest not found: {path}", path=path) from exc
        except OSError as exc:
            raise PersistenceError(f"failed to read {path}: {exc}", path=path) from exc

    def write(self, path: str, data: bytes) -> None:
        """Write data to path, replacing any existing file.

        Raises:
            PersistenceError: the directory, temp file or rename failed.
        """
        directory = os.path.dirname(path) or "."
        tmp_path = None
        try:
            os.makedirs(directory, mode=self.dir_mode, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix=".manifest-", suffix=".tmp", dir=directory)
            with os.fdopen(fd, "wb") as fh:
                fh.write(data)
            os.chmod(tmp_path, self.file_mode)
            os.replace(tmp_path, path)
            tmp_path = None
        except OSError as exc:
            raise PersistenceError(f"failed to write {path}: {exc}", path=path) from exc
        finally:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)

        if is_debug_enabled(logger):
            logger.debug(
                "Wrote file",
                extra=extra_context(
                    event="write",
                    component="store",
                    target=path,
                    size=len(data),
                    mode=oct(self.file_mode),
                ),
            )
