"""
Capability payload schemas.

Pydantic models for custom capability requests/responses, and validation
that reports structured violations.
"""

from acp_extensions.schemas.ask_user_question import (
    HEADER_MAX_LENGTH,
    MAX_OPTIONS,
    MAX_QUESTIONS,
    MIN_OPTIONS,
    MIN_QUESTIONS,
    AskUserQuestionInput,
    AskUserQuestionOption,
    AskUserQuestionQuestion,
    AskUserQuestionRequest,
    AskUserQuestionResponse,
    check_answers_consistency,
    check_ask_user_question_input,
    ensure_answers_consistent,
    validate_ask_user_question_input,
    validate_ask_user_question_request,
    validate_ask_user_question_response,
)
from acp_extensions.schemas.validator import SchemaValidator
from acp_extensions.schemas.violations import (
    SchemaViolation,
    ValidationResult,
    ViolationCode,
)

__all__ = [
    "AskUserQuestionInput",
    "AskUserQuestionOption",
    "AskUserQuestionQuestion",
    "AskUserQuestionRequest",
    "AskUserQuestionResponse",
    "HEADER_MAX_LENGTH",
    "MAX_OPTIONS",
    "MAX_QUESTIONS",
    "MIN_OPTIONS",
    "MIN_QUESTIONS",
    "SchemaValidator",
    "SchemaViolation",
    "ValidationResult",
    "ViolationCode",
    "check_answers_consistency",
    "check_ask_user_question_input",
    "ensure_answers_consistent",
    "validate_ask_user_question_input",
    "validate_ask_user_question_request",
    "validate_ask_user_question_response",
]
