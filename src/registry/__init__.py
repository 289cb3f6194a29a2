"""Sources of candidate Go module versions."""

from .pkgsite import PkgSiteSource, VersionBatch, VersionSource

__all__ = ["PkgSiteSource", "VersionBatch", "VersionSource"]
