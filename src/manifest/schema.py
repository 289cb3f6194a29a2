"""JSON Schema validation for manifest documents.

Wraps jsonschema Draft7 validation and adds the checks a schema cannot
express (absolute repository URL, supported manifest version). Unlike a
fail-fast validator, every problem is collected and reported together.
"""

from __future__ import annotations

from typing import Any, Dict, List
from urllib.parse import urlsplit

from jsonschema import Draft7Validator

from errors import FieldProblem, InvalidSemanticVersionError, ValidationError
from versioning.models import GoVersion
from versioning.parser import parse_lax_version

GIT_HASH_PATTERN = r"^(?:[0-9a-f]{40}|[0-9a-f]{64})$"

MANIFEST_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["manifestVersion", "manifestPayload"],
    "properties": {
        "manifestVersion": {"type": "string", "minLength": 1},
        "manifestPayload": {
            "type": "object",
            "required": ["pluginName", "packageName", "gitRepository"],
            "properties": {
                "pluginName": {"type": "string", "minLength": 1},
                "packageName": {"type": "string", "minLength": 1},
                "gitRepository": {"type": "string", "minLength": 1},
                "gitReference": {
                    "type": ["object", "null"],
                    "required": ["name", "hash"],
                    "properties": {
                        "name": {"type": "string", "minLength": 1},
                        "hash": {"type": "string", "pattern": GIT_HASH_PATTERN},
                    },
                },
            },
        },
    },
}

_VALIDATOR = Draft7Validator(MANIFEST_SCHEMA)


def _join(path) -> str:
    return ".".join(str(p) for p in path)


def _schema_problems(document: Any) -> List[FieldProblem]:
    problems: Dict[str, FieldProblem] = {}
    errs = sorted(_VALIDATOR.iter_errors(document), key=lambda e: [str(p) for p in e.path])
    for err in errs:
        if err.validator == "required" and isinstance(err.instance, dict):
            # One error per missing property; the instance tells us which.
            for prop in err.validator_value:
                if prop not in err.instance:
                    field = _join(list(err.path) + [prop])
                    problems.setdefault(field, FieldProblem(field, "is a required property"))
            continue
        field = _join(err.path) or "<document>"
        problems.setdefault(field, FieldProblem(field, err.message))
    return list(problems.values())


def _semantic_problems(document: Dict[str, Any], supported: GoVersion) -> List[FieldProblem]:
    problems: List[FieldProblem] = []

    raw_version = document.get("manifestVersion")
    if isinstance(raw_version, str) and raw_version:
        try:
            version = parse_lax_version(raw_version)
        except InvalidSemanticVersionError as exc:
            problems.append(FieldProblem("manifestVersion", str(exc)))
        else:
            if version.major != supported.major:
                problems.append(
                    FieldProblem(
                        "manifestVersion",
                        f"unsupported manifest version {raw_version} (supported: {supported.original})",
                    )
                )

    payload = document.get("manifestPayload")
    repo = payload.get("gitRepository") if isinstance(payload, dict) else None
    if isinstance(repo, str) and repo:
        try:
            parts = urlsplit(repo)
            absolute = bool(parts.scheme and parts.netloc)
        except ValueError:
            absolute = False
        if not absolute:
            problems.append(
                FieldProblem("manifestPayload.gitRepository", f"{repo!r} is not an absolute URL")
            )
    return problems


def validate_manifest_document(document: Any, supported: GoVersion) -> None:
    """Validate a decoded manifest document.

    Raises:
        ValidationError: listing every missing or invalid field.
    """
    problems = _schema_problems(document)
    if isinstance(document, dict):
        seen = {p.field for p in problems}
        problems.extend(p for p in _semantic_problems(document, supported) if p.field not in seen)
    if problems:
        raise ValidationError(problems)
