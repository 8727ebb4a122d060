"""
Payload validation against capability schemas.

Validates JSON strings and dictionaries against pydantic models and reports
every violated constraint at once.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from acp_extensions.schemas.violations import (
    SchemaViolation,
    ValidationResult,
    ViolationCode,
    violations_from_errors,
)
from acp_extensions.telemetry import get_logger

logger = get_logger(__name__)


class SchemaValidator:
    """Validator for one capability payload model.

    Example:
        >>> validator = SchemaValidator(AskUserQuestionInput)
        >>> result = validator.validate({"questions": []})
        >>> result.valid
        False
        >>> result.violations[0].code
        <ViolationCode.TOO_FEW_QUESTIONS: 'too_few_questions'>
    """

    def __init__(self, model: type[BaseModel], name: str | None = None) -> None:
        """Initialize validator.

        Args:
            model: Pydantic model class describing the payload
            name: Schema name used in errors (default: model class name)
        """
        self._model = model
        self._name = name or model.__name__

    @property
    def name(self) -> str:
        return self._name

    def json_schema(self) -> dict[str, Any]:
        """JSON schema of the payload, with wire field names."""
        return self._model.model_json_schema(by_alias=True)

    def validate(self, data: str | dict[str, Any] | BaseModel) -> ValidationResult:
        """Validate data against the model.

        Args:
            data: JSON string, dictionary, or model instance

        Returns:
            ValidationResult with every violation found
        """
        if isinstance(data, self._model):
            data = data.model_dump(by_alias=True)
        elif isinstance(data, str):
            try:
                data = json.loads(data)
            except json.JSONDecodeError as e:
                return ValidationResult(
                    valid=False,
                    violations=[
                        SchemaViolation(ViolationCode.INVALID_JSON, "", f"Invalid JSON: {e}")
                    ],
                    schema=self._name,
                )

        try:
            validated = self._model.model_validate(data)
        except PydanticValidationError as e:
            violations = violations_from_errors(e.errors())
            logger.debug(
                "Payload rejected",
                schema=self._name,
                codes=[v.code.value for v in violations],
            )
            return ValidationResult(valid=False, violations=violations, schema=self._name)

        return ValidationResult(valid=True, data=validated, schema=self._name)

    def validate_or_raise(self, data: str | dict[str, Any] | BaseModel) -> Any:
        """Validate data and raise if invalid.

        Returns:
            Validated model instance

        Raises:
            SchemaViolationError: If any constraint is violated
        """
        result = self.validate(data)
        result.raise_if_invalid()
        return result.data
