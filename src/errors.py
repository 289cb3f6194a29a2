"""Error taxonomy for version resolution and manifest persistence.

Only ParseError is absorbed internally (a malformed candidate is logged
and skipped); every other error propagates to the command layer, which
maps it to an exit code.
"""

from __future__ import annotations

from typing import List, NamedTuple, Optional, Sequence


class AgiError(Exception):
    """Base class for all asdf-go-install errors."""


class ParseError(AgiError, ValueError):
    """A single raw version string could not be parsed as a Go version."""

    reason = "invalid Go version"

    def __init__(self, raw: str, detail: Optional[str] = None):
        self.raw = raw
        self.detail = detail
        message = f"{self.reason}: parsed {raw}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class MissingPrefixError(ParseError):
    """The version is missing the leading "v" required by Go versions."""

    reason = 'version is missing leading "v"'


class ContainsBuildMetadataError(ParseError):
    """The version is a valid semantic version but carries build metadata."""

    reason = "version contains build metadata"


class InvalidSemanticVersionError(ParseError):
    """The version (without its prefix) is not a strict semantic version."""

    reason = "version is not a valid semantic version"


class NotFoundError(AgiError):
    """Something the caller asked for does not exist."""


class NoStableVersionError(NotFoundError):
    """A collection holds only pre-release versions (including pseudo-versions)."""

    def __init__(self, message: str = "no stable Go versions were found in the collection"):
        super().__init__(message)


class RepositoryNotFoundError(NotFoundError):
    """The version source did not report a Git repository for the package."""


class FieldProblem(NamedTuple):
    """One missing or invalid manifest field."""

    field: str
    message: str


class ValidationError(AgiError):
    """Aggregate of every missing or invalid field in a manifest document."""

    def __init__(self, problems: Sequence[FieldProblem]):
        self.problems: List[FieldProblem] = list(problems)
        details = "; ".join(f"{p.field}: {p.message}" for p in self.problems)
        super().__init__(f"manifest validation failed: {details}")

    @property
    def fields(self) -> List[str]:
        """Names of the offending fields, in report order."""
        return [p.field for p in self.problems]


class EncodingError(AgiError):
    """JSON encoding or decoding failed; the cause is chained."""


class PersistenceError(AgiError):
    """A filesystem operation failed; the cause is chained."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        super().__init__(message)


class ManifestNotFoundError(PersistenceError, NotFoundError):
    """The manifest file does not exist."""


class FetchError(AgiError):
    """Retrieving candidate versions or a Git reference failed."""

    def __init__(self, message: str, url: Optional[str] = None, status_code: Optional[int] = None):
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class PipelineStateError(AgiError, RuntimeError):
    """An install-lifecycle step was invoked out of order."""
