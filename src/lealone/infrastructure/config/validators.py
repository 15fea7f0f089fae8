"""Schema binding and unknown-property tracking for the server configuration."""

from __future__ import annotations

import re
from typing import Any, Iterable, Mapping

from jsonschema import Draft202012Validator, ValidationError

from lealone.domain.config import DEFAULT_CONFIGURATION, ConfigError

from .schema import load_schema


def build_validator(schema: Mapping[str, Any] | None = None) -> Draft202012Validator:
    schema = schema if schema is not None else load_schema()
    Draft202012Validator.check_schema(schema)
    return Draft202012Validator(schema)


def format_error(field: str, message: str) -> str:
    target = f" {field}:" if field else ""
    return f"Invalid yaml:{target} {message}"


def _unexpected_names(error: ValidationError) -> list[str]:
    schema = error.schema if isinstance(error.schema, Mapping) else {}
    declared = schema.get("properties", {})
    patterns = schema.get("patternProperties", {})
    names = []
    for key in error.instance:
        name = str(key)
        if key in declared or any(re.search(pattern, name) for pattern in patterns):
            continue
        names.append(name)
    return names


class UnknownPropertiesTracker:
    """Collects every undeclared property name seen while binding one document."""

    def __init__(self, document_name: str = DEFAULT_CONFIGURATION) -> None:
        self.document_name = document_name
        self.missing_properties: set[str] = set()

    def record(self, names: Iterable[str]) -> None:
        self.missing_properties.update(names)

    def check(self) -> None:
        if self.missing_properties:
            listed = ", ".join(sorted(self.missing_properties))
            raise ConfigError(
                f"Invalid yaml. Please remove properties [{listed}] from your {self.document_name}"
            )


class ConfigBinder:
    """Validates a parsed document against the schema.

    ``additionalProperties`` violations are handed to the tracker instead of
    failing, so a single pass reports every unknown name. Open maps declare an
    ``additionalProperties`` schema rather than ``false`` and never reach the
    tracker. Any other violation means the document cannot be bound.
    """

    def __init__(self, validator: Draft202012Validator | None = None) -> None:
        self.validator = validator or build_validator()

    def bind(self, document: Any, tracker: UnknownPropertiesTracker) -> Mapping[str, Any]:
        if document is None:
            document = {}
        if not isinstance(document, Mapping):
            raise ConfigError(format_error("<root>", "Top-level document must be a mapping."))

        problems: list[str] = []
        for error in self.validator.iter_errors(document):
            if error.validator == "additionalProperties" and error.validator_value is False:
                tracker.record(_unexpected_names(error))
                continue
            field = "/".join(str(part) for part in error.absolute_path) or "<root>"
            problems.append(f"{field}: {error.message}")

        if problems:
            raise ConfigError(format_error("", "; ".join(problems)))
        return document


__all__ = [
    "ConfigBinder",
    "UnknownPropertiesTracker",
    "build_validator",
    "format_error",
]
