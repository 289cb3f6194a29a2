"""Resolve a selected Go version to a Git reference with ``git ls-remote``."""
from __future__ import annotations

import logging
import subprocess
from typing import Dict, Optional

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer
from errors import FetchError
from manifest.models import GitReference
from versioning.models import GoVersion

logger = logging.getLogger(__name__)

TAG_REF_PREFIX = "refs/tags/"
PEELED_SUFFIX = "^{}"


def parse_ls_remote(output: str) -> Dict[str, str]:
    """Map reference names to hashes from ``git ls-remote`` output."""
    refs: Dict[str, str] = {}
    for line in output.splitlines():
        obj_hash, sep, name = line.strip().partition("\t")
        if sep and obj_hash and name:
            refs[name] = obj_hash.lower()
    return refs


def resolve_tag_reference(repository: str, version: GoVersion) -> Optional[GitReference]:
    """Look up the tag for version in repository.

    Annotated tags resolve to the commit they point at.

    Returns:
        The reference, or None when the repository has no such tag.

    Raises:
        FetchError: git is missing, exits non-zero or times out.
    """
    tag = f"{TAG_REF_PREFIX}{version.original}"
    cmd = ["git", "ls-remote", "--tags", repository, tag, f"{tag}{PEELED_SUFFIX}"]
    with Timer() as t:
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=Constants.GIT_TIMEOUT_SEC,
                check=True,
            )
        except FileNotFoundError as exc:
            raise FetchError("git executable not found", url=repository) from exc
        except subprocess.TimeoutExpired as exc:
            raise FetchError(
                f"git ls-remote {safe_url(repository)} timed out after {Constants.GIT_TIMEOUT_SEC} seconds",
                url=repository,
            ) from exc
        except subprocess.CalledProcessError as exc:
            stderr = (exc.stderr or "").strip()
            raise FetchError(
                f"git ls-remote {safe_url(repository)} failed with exit code {exc.returncode}: {stderr}",
                url=repository,
            ) from exc

    refs = parse_ls_remote(result.stdout)
    if is_debug_enabled(logger):
        logger.debug(
            "Listed remote tags",
            extra=extra_context(
                event="ls_remote",
                component="git",
                target=safe_url(repository),
                tag=tag,
                ref_count=len(refs),
                duration_ms=t.duration_ms(),
            ),
        )

    obj_hash = refs.get(f"{tag}{PEELED_SUFFIX}") or refs.get(tag)
    if obj_hash is None:
        return None
    return GitReference(name=tag, hash=obj_hash)
