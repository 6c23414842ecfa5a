"""JSON Schema validation for mode, category and user-definitions payloads."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

from jsonschema import Draft202012Validator

from roo_init.models import CategoryDefinition, ModeDefinition, Origin, UserDefinitions

_SCHEMA_DIALECT = "https://json-schema.org/draft/2020-12/schema"

RULE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "id": {"type": "string"},
        "name": {"type": "string"},
        "description": {"type": "string"},
        "sourcePath": {"type": "string", "minLength": 1},
        "isGeneric": {"type": "boolean"},
        "targetPath": {"type": "string"},
    },
    "required": ["id", "name", "description", "sourcePath", "isGeneric"],
}

CATEGORY_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "slug": {"type": "string", "minLength": 1},
        "name": {"type": "string"},
        "description": {"type": "string"},
        "source": {"enum": ["system", "user"]},
    },
    "required": ["slug", "name"],
}

MODE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "slug": {"type": "string", "minLength": 1},
        "name": {"type": "string"},
        "description": {"type": "string"},
        "customInstructions": {"type": "string"},
        "groups": {
            "type": "array",
            "items": {
                "anyOf": [
                    {"type": "string"},
                    {
                        "type": "array",
                        "items": {"anyOf": [{"type": "string"}, {"type": "object"}]},
                    },
                ]
            },
        },
        "categorySlugs": {
            "type": "array",
            "items": {"type": "string"},
            "minItems": 1,
        },
        "associatedRuleFiles": {"type": "array", "items": RULE_SCHEMA},
        "source": {"enum": ["system", "user"]},
    },
    "required": ["slug", "name", "description", "categorySlugs", "associatedRuleFiles"],
}

MODES_FILE_SCHEMA: dict[str, Any] = {
    "$schema": _SCHEMA_DIALECT,
    "type": "array",
    "items": MODE_SCHEMA,
}

CATEGORIES_FILE_SCHEMA: dict[str, Any] = {
    "$schema": _SCHEMA_DIALECT,
    "type": "array",
    "items": CATEGORY_SCHEMA,
}

USER_DEFINITIONS_SCHEMA: dict[str, Any] = {
    "$schema": _SCHEMA_DIALECT,
    "type": "object",
    "properties": {
        "customModes": {"type": "array", "items": MODE_SCHEMA},
        "customCategories": {"type": "array", "items": CATEGORY_SCHEMA},
    },
}

_MODES_VALIDATOR = Draft202012Validator(MODES_FILE_SCHEMA)
_CATEGORIES_VALIDATOR = Draft202012Validator(CATEGORIES_FILE_SCHEMA)
_USER_DEFINITIONS_VALIDATOR = Draft202012Validator(USER_DEFINITIONS_SCHEMA)


@dataclass(frozen=True)
class SchemaViolation:
    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path} - {self.message}" if self.path else self.message


V = TypeVar("V")


@dataclass(frozen=True)
class ValidationResult(Generic[V]):
    value: Optional[V] = None
    violations: tuple[SchemaViolation, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.violations

    def messages(self) -> list[str]:
        return [str(item) for item in self.violations]


def collect_violations(
    validator: Draft202012Validator, payload: Any
) -> tuple[SchemaViolation, ...]:
    errors = sorted(
        validator.iter_errors(payload),
        key=lambda error: [str(part) for part in error.absolute_path],
    )
    return tuple(
        SchemaViolation(
            path=".".join(str(part) for part in error.absolute_path),
            message=error.message,
        )
        for error in errors
    )


def validate_modes(
    payload: Any, origin: Origin = Origin.SYSTEM
) -> ValidationResult[list[ModeDefinition]]:
    violations = collect_violations(_MODES_VALIDATOR, payload)
    if violations:
        return ValidationResult(violations=violations)
    return ValidationResult(
        value=[ModeDefinition.from_payload(item, origin) for item in payload]
    )


def validate_categories(
    payload: Any, origin: Origin = Origin.SYSTEM
) -> ValidationResult[list[CategoryDefinition]]:
    violations = collect_violations(_CATEGORIES_VALIDATOR, payload)
    if violations:
        return ValidationResult(violations=violations)
    return ValidationResult(
        value=[CategoryDefinition.from_payload(item, origin) for item in payload]
    )


def validate_user_definitions(payload: Any) -> ValidationResult[UserDefinitions]:
    violations = collect_violations(_USER_DEFINITIONS_VALIDATOR, payload)
    if violations:
        return ValidationResult(violations=violations)
    return ValidationResult(
        value=UserDefinitions(
            custom_modes=tuple(
                ModeDefinition.from_payload(item, Origin.USER)
                for item in payload.get("customModes", [])
            ),
            custom_categories=tuple(
                CategoryDefinition.from_payload(item, Origin.USER)
                for item in payload.get("customCategories", [])
            ),
        )
    )
