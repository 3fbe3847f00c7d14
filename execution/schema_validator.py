"""JSON Schema checks for stored project records.

The store runs every record through config/schemas/project.schema.json
before writing it, so a malformed area list or an out-of-range status never
reaches disk.
"""

import json
from functools import lru_cache

from jsonschema import Draft202012Validator, ValidationError

from config.settings import PROJECT_SCHEMA


@lru_cache(maxsize=1)
def _project_validator() -> Draft202012Validator:
    with open(PROJECT_SCHEMA, "r", encoding="utf-8") as f:
        return Draft202012Validator(json.load(f))


def _describe(error: ValidationError) -> str:
    location = ".".join(str(p) for p in error.absolute_path) or "root"
    return f"{location}: {error.message}"


def get_project_validation_errors(project: dict) -> list[str]:
    """Every schema violation in a project record, as 'path: message' strings.

    Args:
        project: The record as it would be written to disk.

    Returns:
        Errors ordered by their location in the record. Empty if valid.
    """
    errors = _project_validator().iter_errors(project)
    return [_describe(e) for e in sorted(errors, key=lambda e: [str(p) for p in e.absolute_path])]
