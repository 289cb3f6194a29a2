"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONNECTION_ERROR = 2
    NOT_FOUND = 3
    INVALID_MANIFEST = 4


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    PKGSITE_BASE_URL = "https://pkg.go.dev"
    PKGSITE_TAB_KEY = "tab"
    PKGSITE_VERSIONS_TAB = "versions"
    PKGSITE_VERSION_CONTAINER = "Version-tag"
    PKGSITE_REPOSITORY_CONTAINER = "UnitMeta-repo"

    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests
    HTTP_RETRY_MAX = 3
    HTTP_RETRY_BASE_DELAY_SEC = 0.3
    GIT_TIMEOUT_SEC = 60

    DEFAULT_DATA_DIR = "~/.asdf"
    PLUGINS_DIR = "plugins"
    MANIFEST_FILE_MODE = 0o644
    PLUGIN_DIR_MODE = 0o755

    LOG_FORMAT = "[%(levelname)s] %(message)s"

    ENV_DATA_DIR = "ASDF_DATA_DIR"
    ENV_INSTALL_VERSION = "ASDF_INSTALL_VERSION"
    ENV_INSTALL_PATH = "ASDF_INSTALL_PATH"
    ENV_DOWNLOAD_PATH = "ASDF_DOWNLOAD_PATH"
    ENV_PLUGIN_PATH = "ASDF_PLUGIN_PATH"
    ENV_CONFIG = "AGI_CONFIG"
    ENV_LOG_LEVEL = "AGI_LOG_LEVEL"
    ENV_LOG_FORMAT = "AGI_LOG_FORMAT"
