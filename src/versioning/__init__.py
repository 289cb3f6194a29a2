"""Go module version parsing, ordering and resolution."""

from .models import GO_VERSION_PREFIX, PSEUDO_VERSION_PATTERN, GoVersion, VersionCollection
from .parser import parse_go_version, parse_lax_version

__all__ = [
    "GO_VERSION_PREFIX",
    "PSEUDO_VERSION_PATTERN",
    "GoVersion",
    "VersionCollection",
    "parse_go_version",
    "parse_lax_version",
]
