"""Version resolution service: discover, select and persist one install.

Drives the install lifecycle

    UNRESOLVED -> VERSIONS_DISCOVERED -> VERSION_SELECTED -> MANIFEST_PERSISTED

A failing step raises and leaves the state where it was, so the caller
may inspect the partial result or retry the step.
"""

import logging
from enum import Enum
from typing import Callable, Iterable, List, Optional, Tuple

from common.logging_utils import extra_context, is_debug_enabled
from errors import ParseError, PipelineStateError, RepositoryNotFoundError
from manifest.models import GitReference, Manifest
from manifest.store import FileGateway
from registry.pkgsite import VersionSource

from .models import GoVersion, VersionCollection
from .parser import parse_go_version

logger = logging.getLogger(__name__)

# Resolves (repository URL, selected version) to a Git reference, or None.
ReferenceResolver = Callable[[str, GoVersion], Optional[GitReference]]


class ResolutionState(Enum):
    """Install-lifecycle states for a single resolution attempt."""
    UNRESOLVED = "unresolved"
    VERSIONS_DISCOVERED = "versions_discovered"
    VERSION_SELECTED = "version_selected"
    MANIFEST_PERSISTED = "manifest_persisted"


def parse_candidates(package: str, raw_versions: Iterable[str]) -> Tuple[VersionCollection, List[ParseError]]:
    """Parse raw candidate strings, skipping (and logging) malformed ones.

    Returns:
        Tuple of (collection of valid versions, rejected parse errors)
    """
    parsed: List[GoVersion] = []
    rejected: List[ParseError] = []
    for raw in raw_versions:
        try:
            parsed.append(parse_go_version(raw))
        except ParseError as exc:
            logger.warning(
                "Skipping invalid Go version %s for %s: %s",
                raw,
                package,
                exc,
                extra=extra_context(
                    event="skip_version",
                    component="resolver",
                    package=package,
                    version=raw,
                    error=type(exc).__name__,
                ),
            )
            rejected.append(exc)
    return VersionCollection(*parsed), rejected


def collect_versions(source: VersionSource, package: str) -> VersionCollection:
    """Fetch candidates for package from source and return the valid ones, sorted."""
    batch = source.fetch(package)
    collection, _ = parse_candidates(package, batch.versions)
    return collection


class InstallResolution:
    """One attempt at resolving and recording a plugin installation."""

    def __init__(
        self,
        source: VersionSource,
        plugin_name: str,
        package: str,
        data_dir: str,
        *,
        reference_resolver: Optional[ReferenceResolver] = None,
        gateway: Optional[FileGateway] = None,
    ):
        self.source = source
        self.plugin_name = plugin_name
        self.package = package
        self.data_dir = data_dir
        self.reference_resolver = reference_resolver
        self.gateway = gateway

        self.state = ResolutionState.UNRESOLVED
        self.collection: Optional[VersionCollection] = None
        self.rejected: List[ParseError] = []
        self.repository: Optional[str] = None
        self.selected: Optional[GoVersion] = None
        self.manifest: Optional[Manifest] = None

    def _require(self, *allowed: ResolutionState) -> None:
        if self.state not in allowed:
            raise PipelineStateError(
                f"cannot run this step from state {self.state.value}; "
                f"expected one of {', '.join(s.value for s in allowed)}"
            )

    def discover(self) -> VersionCollection:
        """Fetch and parse the candidate versions."""
        self._require(ResolutionState.UNRESOLVED, ResolutionState.VERSIONS_DISCOVERED)
        batch = self.source.fetch(self.package)
        self.collection, self.rejected = parse_candidates(self.package, batch.versions)
        self.repository = batch.repository
        self.state = ResolutionState.VERSIONS_DISCOVERED
        if is_debug_enabled(logger):
            logger.debug(
                "Discovered versions",
                extra=extra_context(
                    event="discover",
                    component="resolver",
                    package=self.package,
                    candidate_count=len(batch.versions),
                    valid_count=len(self.collection),
                    repository=self.repository,
                ),
            )
        return self.collection

    def select(self) -> GoVersion:
        """Select the latest stable version from the discovered collection."""
        self._require(ResolutionState.VERSIONS_DISCOVERED, ResolutionState.VERSION_SELECTED)
        assert self.collection is not None
        self.selected = self.collection.latest_stable()
        self.state = ResolutionState.VERSION_SELECTED
        logger.info("Selected %s %s", self.package, self.selected)
        return self.selected

    def persist(self) -> Manifest:
        """Build the manifest for the selected version and write it to disk.

        An existing manifest for the plugin is overwritten.
        """
        self._require(ResolutionState.VERSION_SELECTED)
        assert self.selected is not None
        if not self.repository:
            raise RepositoryNotFoundError(f"no Git repository was found for {self.package}")

        manifest = Manifest.new(self.plugin_name, self.package, self.repository)
        if self.reference_resolver is not None:
            ref = self.reference_resolver(self.repository, self.selected)
            if ref is None:
                logger.warning(
                    "No Git tag %s found in %s; manifest has no reference",
                    self.selected,
                    self.repository,
                )
            else:
                manifest = manifest.with_git_reference(ref)

        manifest.write(self.data_dir, self.plugin_name, gateway=self.gateway)
        self.manifest = manifest
        self.state = ResolutionState.MANIFEST_PERSISTED
        return manifest

    def run(self) -> Manifest:
        """Run every remaining step and return the persisted manifest."""
        if self.state is ResolutionState.UNRESOLVED:
            self.discover()
        if self.state is ResolutionState.VERSIONS_DISCOVERED:
            self.select()
        return self.persist()
