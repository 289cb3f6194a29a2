"""Data models for Go module versions and sorted version collections."""

import functools
import re
from dataclasses import dataclass
from typing import Iterator, Tuple

import semantic_version

from errors import NoStableVersionError

# Prefix required for Go version strings.
GO_VERSION_PREFIX = "v"

# Pattern matching the pre-release suffix of a Go pseudo-version.
PSEUDO_VERSION_PATTERN = r"^[0-9]{14}-[0-9a-f]{12}$"

_PSEUDO_VERSION_RE = re.compile(PSEUDO_VERSION_PATTERN)


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class GoVersion:
    """A parsed Go module version number.

    Numeric and pre-release fields come from the strict semantic version
    parse; ``original`` keeps the unstripped input (e.g. ``v1.2.3``) so
    that re-serialization is lossless.
    """
    original: str
    semver: semantic_version.Version

    @property
    def major(self) -> int:
        return self.semver.major

    @property
    def minor(self) -> int:
        return self.semver.minor

    @property
    def patch(self) -> int:
        return self.semver.patch

    @property
    def prerelease(self) -> str:
        """Pre-release label, or an empty string for releases."""
        return ".".join(self.semver.prerelease)

    @property
    def canonical(self) -> str:
        """Semantic version text without the Go prefix."""
        return str(self.semver)

    def is_prerelease(self) -> bool:
        """Whether the version has a pre-release suffix."""
        return self.prerelease != ""

    def is_pseudo_version(self) -> bool:
        """Whether the pre-release suffix is formatted as a pseudo-version."""
        return _PSEUDO_VERSION_RE.match(self.prerelease) is not None

    def is_release(self) -> bool:
        """Whether the version references a release (no pre-release suffix)."""
        return not self.is_prerelease()

    def _key(self) -> Tuple[semantic_version.Version, str]:
        return self.semver, self.original

    def __eq__(self, other):
        if not isinstance(other, GoVersion):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other):
        if not isinstance(other, GoVersion):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self):
        return hash(self._key())

    def __str__(self) -> str:
        return self.original


class VersionCollection:
    """A sorted, immutable collection of Go module version numbers."""

    def __init__(self, *versions: GoVersion):
        self._versions: Tuple[GoVersion, ...] = tuple(sorted(versions))

    def all(self) -> Iterator[GoVersion]:
        """Iterate the versions from lowest to highest precedence."""
        return iter(self._versions)

    def latest_stable(self) -> GoVersion:
        """Return the highest-precedence release version.

        Raises:
            NoStableVersionError: if the collection holds only pre-releases.
        """
        for ver in reversed(self._versions):
            if ver.is_release():
                return ver
        raise NoStableVersionError()

    def __iter__(self) -> Iterator[GoVersion]:
        return self.all()

    def __len__(self) -> int:
        return len(self._versions)

    def __str__(self) -> str:
        return " ".join(ver.original for ver in self._versions)

    def __repr__(self) -> str:
        return f"VersionCollection({str(self)!r})"
