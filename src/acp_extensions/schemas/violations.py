"""
Structured schema violations.

Pydantic errors are translated into ``SchemaViolation`` records with a
stable ``ViolationCode`` so callers can tell "too many questions" from
"header too long" without parsing messages.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from acp_extensions.errors import SchemaViolationError


class ViolationCode(str, Enum):
    """Violated constraint."""

    # AskUserQuestion request
    TOO_MANY_QUESTIONS = "too_many_questions"
    TOO_FEW_QUESTIONS = "too_few_questions"
    EMPTY_QUESTION = "empty_question"
    HEADER_TOO_LONG = "header_too_long"
    TOO_MANY_OPTIONS = "too_many_options"
    TOO_FEW_OPTIONS = "too_few_options"
    EMPTY_LABEL = "empty_label"
    EMPTY_DESCRIPTION = "empty_description"

    # AskUserQuestion response against its request
    UNKNOWN_HEADER = "unknown_header"
    MISSING_ANSWER = "missing_answer"
    WRONG_ANSWER_KIND = "wrong_answer_kind"

    # Generic
    MISSING_FIELD = "missing_field"
    INVALID_TYPE = "invalid_type"
    INVALID_VALUE = "invalid_value"
    INVALID_JSON = "invalid_json"


# (field name, pydantic error type) -> code
_FIELD_CODES: dict[tuple[str, str], ViolationCode] = {
    ("questions", "too_long"): ViolationCode.TOO_MANY_QUESTIONS,
    ("questions", "too_short"): ViolationCode.TOO_FEW_QUESTIONS,
    ("question", "string_too_short"): ViolationCode.EMPTY_QUESTION,
    ("header", "string_too_long"): ViolationCode.HEADER_TOO_LONG,
    ("options", "too_long"): ViolationCode.TOO_MANY_OPTIONS,
    ("options", "too_short"): ViolationCode.TOO_FEW_OPTIONS,
    ("label", "string_too_short"): ViolationCode.EMPTY_LABEL,
    ("description", "string_too_short"): ViolationCode.EMPTY_DESCRIPTION,
}


@dataclass(frozen=True)
class SchemaViolation:
    """One failed constraint.

    Attributes:
        code: Which constraint failed
        field_path: Location in the payload, e.g. ``questions[0].header``
        message: Human-readable description
    """

    code: ViolationCode
    field_path: str
    message: str

    def __str__(self) -> str:
        if self.field_path:
            return f"{self.field_path}: {self.message}"
        return self.message

    def to_dict(self) -> dict[str, str]:
        return {"code": self.code.value, "field": self.field_path, "message": self.message}


def format_loc(loc: Sequence[int | str]) -> str:
    """Render a pydantic error location as ``questions[0].options[1].label``."""
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        elif path:
            path += f".{part}"
        else:
            path = str(part)
    return path


def classify_error(loc: Sequence[int | str], error_type: str) -> ViolationCode:
    """Map a pydantic error (location and type) to a ViolationCode."""
    field_name = next((p for p in reversed(loc) if isinstance(p, str)), "")
    code = _FIELD_CODES.get((field_name, error_type))
    if code is not None:
        return code
    if error_type == "missing":
        return ViolationCode.MISSING_FIELD
    if error_type.endswith(("_type", "_parsing")):
        return ViolationCode.INVALID_TYPE
    return ViolationCode.INVALID_VALUE


def violations_from_errors(errors: Sequence[dict[str, Any]]) -> list[SchemaViolation]:
    """Convert ``pydantic.ValidationError.errors()`` output."""
    return [
        SchemaViolation(
            code=classify_error(err["loc"], err["type"]),
            field_path=format_loc(err["loc"]),
            message=err["msg"],
        )
        for err in errors
    ]


@dataclass
class ValidationResult:
    """Result of validation.

    Attributes:
        valid: Whether validation passed
        violations: Every failed constraint
        data: Validated model instance (None when invalid)
    """

    valid: bool = True
    violations: list[SchemaViolation] = field(default_factory=list)
    data: Any = None
    schema: str | None = None

    def __bool__(self) -> bool:
        """Return True if validation passed."""
        return self.valid

    @property
    def errors(self) -> list[str]:
        """Violation messages, prefixed with their field path."""
        return [str(v) for v in self.violations]

    def raise_if_invalid(self) -> None:
        """Raise SchemaViolationError if validation failed."""
        if not self.valid:
            raise SchemaViolationError(
                f"{self.schema or 'Payload'} rejected: " + "; ".join(self.errors),
                self.violations,
                schema=self.schema,
            )
