"""Schema-versioned installation manifests."""

from .models import CURRENT_MANIFEST_VERSION, MANIFEST_VERSION_V1, GitReference, Manifest
from .store import MANIFEST_FILENAME, FileGateway, manifest_path

__all__ = [
    "CURRENT_MANIFEST_VERSION",
    "MANIFEST_VERSION_V1",
    "MANIFEST_FILENAME",
    "FileGateway",
    "GitReference",
    "Manifest",
    "manifest_path",
]
