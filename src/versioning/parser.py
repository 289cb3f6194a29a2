"""Parsing utilities for Go module version numbers.

A Go module version number differs from a strict semantic version in
three ways:

1. The leading "v", optional in a lax semantic version and not allowed
   in a strict one, is required.
2. Build metadata (the "+..." suffix) is not allowed.
3. A pseudo-version is a semantic version whose pre-release suffix is a
   14-digit timestamp followed by a 12-character commit hash prefix.

See https://go.dev/doc/modules/version-numbers
"""

import re

import semantic_version

from errors import ContainsBuildMetadataError, InvalidSemanticVersionError, MissingPrefixError
from .models import GO_VERSION_PREFIX, GoVersion

_WHITESPACE_RE = re.compile(r"\s")


def parse_go_version(raw: str) -> GoVersion:
    """Parse raw as a Go module version number.

    Raises:
        MissingPrefixError: raw does not start with "v".
        InvalidSemanticVersionError: the remainder is not a strict semver.
        ContainsBuildMetadataError: the remainder carries build metadata.
    """
    if not raw.startswith(GO_VERSION_PREFIX):
        raise MissingPrefixError(raw)

    text = raw[len(GO_VERSION_PREFIX):]
    # semantic_version anchors with $, which also matches before a trailing newline
    if _WHITESPACE_RE.search(text):
        raise InvalidSemanticVersionError(raw, "contains whitespace")

    try:
        ver = semantic_version.Version(text)
    except ValueError as exc:
        raise InvalidSemanticVersionError(raw, str(exc)) from exc

    if ver.build:
        raise ContainsBuildMetadataError(raw)

    return GoVersion(original=raw, semver=ver)


def parse_lax_version(raw: str) -> GoVersion:
    """Parse a loosely formatted version such as "v1" or "1.2".

    The prefix is optional and missing minor/patch numbers default to
    zero. Used for schema version tags rather than module versions.

    Raises:
        InvalidSemanticVersionError: raw has no usable numeric component.
    """
    text = raw[len(GO_VERSION_PREFIX):] if raw.startswith(GO_VERSION_PREFIX) else raw
    try:
        ver = semantic_version.Version.coerce(text)
    except ValueError as exc:
        raise InvalidSemanticVersionError(raw, str(exc)) from exc
    return GoVersion(original=raw, semver=ver)
