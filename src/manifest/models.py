"""Manifest describing how a plugin installs its Go tool.

The manifest is immutable: derive a changed copy with
``with_git_reference`` instead of mutating a shared instance.
"""
from __future__ import annotations

import dataclasses
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from common.logging_utils import extra_context, is_debug_enabled
from errors import EncodingError
from versioning.models import GoVersion
from versioning.parser import parse_lax_version

from .schema import validate_manifest_document
from .store import FileGateway, manifest_path

logger = logging.getLogger(__name__)

MANIFEST_VERSION_V1 = "v1"
CURRENT_MANIFEST_VERSION: GoVersion = parse_lax_version(MANIFEST_VERSION_V1)


@dataclass(frozen=True)
class GitReference:
    """A named Git reference and the object hash it points at."""
    name: str
    hash: str

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "hash": self.hash}


@dataclass(frozen=True)
class Manifest:
    """Installation record for one plugin."""
    manifest_version: GoVersion
    plugin_name: str
    package_name: str
    git_repository: str
    git_reference: Optional[GitReference] = None

    @classmethod
    def new(cls, name: str, package: str, repository: str) -> "Manifest":
        """Create a manifest at the current schema version with no Git reference."""
        return cls(
            manifest_version=CURRENT_MANIFEST_VERSION,
            plugin_name=name,
            package_name=package,
            git_repository=repository,
        )

    def with_git_reference(self, ref: GitReference) -> "Manifest":
        """Return a copy of this manifest that includes ref."""
        return dataclasses.replace(self, git_reference=ref)

    def to_document(self) -> Dict[str, Any]:
        """Return the JSON-ready document; gitReference is omitted when unset."""
        payload: Dict[str, Any] = {
            "pluginName": self.plugin_name,
            "packageName": self.package_name,
            "gitRepository": self.git_repository,
        }
        if self.git_reference is not None:
            payload["gitReference"] = self.git_reference.to_dict()
        return {
            "manifestVersion": self.manifest_version.original,
            "manifestPayload": payload,
        }

    @classmethod
    def from_document(cls, document: Any) -> "Manifest":
        """Build a manifest from a decoded JSON document.

        Raises:
            ValidationError: listing every missing or invalid field.
        """
        validate_manifest_document(document, CURRENT_MANIFEST_VERSION)
        payload = document["manifestPayload"]
        ref = payload.get("gitReference")
        return cls(
            manifest_version=parse_lax_version(document["manifestVersion"]),
            plugin_name=payload["pluginName"],
            package_name=payload["packageName"],
            git_repository=payload["gitRepository"],
            git_reference=GitReference(name=ref["name"], hash=ref["hash"]) if ref is not None else None,
        )

    def encode(self) -> bytes:
        """Encode the manifest as UTF-8 JSON."""
        try:
            return json.dumps(self.to_document(), indent=2).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise EncodingError(f"failed to encode manifest: {exc}") from exc

    @classmethod
    def decode(cls, data: bytes) -> "Manifest":
        """Decode and validate UTF-8 JSON manifest bytes.

        Raises:
            EncodingError: data is not valid UTF-8 JSON.
            ValidationError: the document is missing or has invalid fields.
        """
        try:
            document = json.loads(data.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise EncodingError(f"failed to decode manifest: {exc}") from exc
        return cls.from_document(document)

    @classmethod
    def read(cls, data_dir: str, plugin_name: str, gateway: Optional[FileGateway] = None) -> "Manifest":
        """Read and validate the manifest in the plugin's top-level directory."""
        path = manifest_path(data_dir, plugin_name)
        data = (gateway or FileGateway()).read(path)
        manifest = cls.decode(data)
        if is_debug_enabled(logger):
            logger.debug(
                "Read manifest",
                extra=extra_context(
                    event="read",
                    component="manifest",
                    plugin=plugin_name,
                    target=path,
                    has_reference=manifest.git_reference is not None,
                ),
            )
        return manifest

    def write(self, data_dir: str, plugin_name: str, gateway: Optional[FileGateway] = None) -> None:
        """Encode the manifest and write it to the plugin's top-level directory."""
        path = manifest_path(data_dir, plugin_name)
        (gateway or FileGateway()).write(path, self.encode())
        logger.info("Wrote manifest for %s to %s", plugin_name, path)
