"""JSON Schema checks for the package.json fields the resolver reads.

Wraps jsonschema Draft7 validation. Only recognized fields are described;
any other key in a descriptor is allowed and ignored.
"""

from __future__ import annotations

from typing import Any, Dict, List

from jsonschema import Draft7Validator

DESCRIPTOR_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "version": {"type": "string"},
        "type": {"type": "string", "enum": ["module", "commonjs"]},
        "main": {"type": "string"},
        "module": {"type": "string"},
        "exports": {"type": ["string", "object", "array", "null"]},
    },
    "additionalProperties": True,
}

_VALIDATOR = Draft7Validator(DESCRIPTOR_SCHEMA)


class SchemaError(ValueError):
    """Raised when a descriptor fails the schema as a whole."""


def validate_root(data: Any) -> None:
    """Raise SchemaError for errors on the document itself, not on a field."""
    for err in _VALIDATOR.iter_errors(data):
        if not err.path:
            raise SchemaError(f"invalid descriptor: {err.message}")


def invalid_fields(data: Dict[str, Any]) -> List[str]:
    """Return the recognized top-level fields whose values fail the schema."""
    fields = set()
    for err in _VALIDATOR.iter_errors(data):
        if err.path:
            fields.add(str(err.path[0]))
    return sorted(fields)
