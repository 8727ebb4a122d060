"""
AskUserQuestion capability schema.

The agent asks the human 1-4 multiple-choice questions through the client
UI; the client answers with the chosen option label(s) keyed by each
question's header.

Wire format::

    request:  {"sessionId": str, "questions": [Question, ...]}
    response: {"answers": {header: str | [str, ...]}, "cancelled"?: bool}
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from acp_extensions.errors import SchemaViolationError
from acp_extensions.schemas.validator import SchemaValidator
from acp_extensions.schemas.violations import (
    SchemaViolation,
    ValidationResult,
    ViolationCode,
)

MIN_QUESTIONS = 1
MAX_QUESTIONS = 4
MIN_OPTIONS = 2
MAX_OPTIONS = 4
HEADER_MAX_LENGTH = 12


class AskUserQuestionOption(BaseModel):
    """One selectable answer."""

    model_config = ConfigDict(populate_by_name=True)

    label: str = Field(
        min_length=1, strict=True, description="Display text for this option (1-5 words)"
    )
    description: str = Field(
        min_length=1, strict=True, description="Explanation of what this option means"
    )


class AskUserQuestionQuestion(BaseModel):
    """A single question with its options."""

    model_config = ConfigDict(populate_by_name=True)

    question: str = Field(
        min_length=1, strict=True, description="The complete question to ask the user"
    )
    header: str = Field(
        max_length=HEADER_MAX_LENGTH,
        strict=True,
        description="Short label displayed as chip/tag (max 12 chars)",
    )
    options: list[AskUserQuestionOption] = Field(
        min_length=MIN_OPTIONS,
        max_length=MAX_OPTIONS,
        description="Available choices (2-4 options)",
    )
    multi_select: bool = Field(
        alias="multiSelect", strict=True, description="Allow multiple selections"
    )


class AskUserQuestionInput(BaseModel):
    """Tool input: the questions to ask."""

    model_config = ConfigDict(populate_by_name=True)

    questions: list[AskUserQuestionQuestion] = Field(
        min_length=MIN_QUESTIONS,
        max_length=MAX_QUESTIONS,
        description="Questions to ask the user (1-4 questions)",
    )

    @field_validator("questions")
    @classmethod
    def _check_unique_headers(
        cls, questions: list[AskUserQuestionQuestion]
    ) -> list[AskUserQuestionQuestion]:
        # Answers are keyed by header, so two questions may not share one.
        seen: set[str] = set()
        for question in questions:
            if question.header in seen:
                raise PydanticCustomError(
                    "duplicate_header",
                    "Header {header} is used by more than one question",
                    {"header": repr(question.header)},
                )
            seen.add(question.header)
        return questions

    def headers(self) -> list[str]:
        """Question headers, in order."""
        return [q.header for q in self.questions]

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class AskUserQuestionRequest(AskUserQuestionInput):
    """Request to ask the user a question via the client UI."""

    session_id: str = Field(alias="sessionId", strict=True)

    @classmethod
    def for_session(
        cls, session_id: str, questions: AskUserQuestionInput | list[Any]
    ) -> AskUserQuestionRequest:
        """Build and validate a request from tool input or raw questions."""
        if isinstance(questions, AskUserQuestionInput):
            raw = questions.model_dump(by_alias=True)["questions"]
        else:
            raw = [
                q.model_dump(by_alias=True) if isinstance(q, BaseModel) else q
                for q in questions
            ]
        return validate_ask_user_question_request({"sessionId": session_id, "questions": raw})


class AskUserQuestionResponse(BaseModel):
    """Response from the client with the user's answers.

    Attributes:
        answers: Map of question header to selected answer(s)
        cancelled: True if the user dismissed the question
    """

    model_config = ConfigDict(populate_by_name=True)

    answers: dict[str, str | list[str]] = Field(
        description="Selected option label(s) keyed by question header"
    )
    cancelled: bool | None = Field(default=None, strict=True)

    @field_validator("answers", mode="before")
    @classmethod
    def _check_answer_values(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        for header, answer in value.items():
            if isinstance(answer, str):
                continue
            if isinstance(answer, list) and all(isinstance(a, str) for a in answer):
                continue
            raise PydanticCustomError(
                "answer_type",
                "Answer for {header} must be a string or a list of strings",
                {"header": repr(header)},
            )
        return value

    @property
    def is_cancelled(self) -> bool:
        return self.cancelled is True

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


_input_validator = SchemaValidator(AskUserQuestionInput, name="AskUserQuestion input")
_request_validator = SchemaValidator(AskUserQuestionRequest, name="AskUserQuestion request")
_response_validator = SchemaValidator(
    AskUserQuestionResponse, name="AskUserQuestion response"
)


def check_ask_user_question_input(payload: Any) -> ValidationResult:
    """Validate tool input without raising."""
    return _input_validator.validate(payload)


def validate_ask_user_question_input(payload: Any) -> AskUserQuestionInput:
    """Validate tool input; raises SchemaViolationError listing every violation."""
    return _input_validator.validate_or_raise(payload)


def validate_ask_user_question_request(payload: Any) -> AskUserQuestionRequest:
    """Validate a full ``_claude-acp/askUserQuestion`` request."""
    return _request_validator.validate_or_raise(payload)


def validate_ask_user_question_response(payload: Any) -> AskUserQuestionResponse:
    """Validate the shape of a client response."""
    return _response_validator.validate_or_raise(payload)


def check_answers_consistency(
    request: AskUserQuestionInput,
    response: AskUserQuestionResponse,
) -> list[SchemaViolation]:
    """Compare a response against the request it answers.

    Flags answers for headers the request never asked, questions left
    unanswered (unless the user cancelled), and answers whose kind does not
    match ``multiSelect``.
    """
    violations: list[SchemaViolation] = []
    questions = {q.header: q for q in request.questions}

    for header, answer in response.answers.items():
        question = questions.get(header)
        if question is None:
            violations.append(
                SchemaViolation(
                    ViolationCode.UNKNOWN_HEADER,
                    f"answers.{header}",
                    f"No question with header {header!r} was asked",
                )
            )
        elif question.multi_select and isinstance(answer, str):
            violations.append(
                SchemaViolation(
                    ViolationCode.WRONG_ANSWER_KIND,
                    f"answers.{header}",
                    "Multi-select question must be answered with a list",
                )
            )
        elif not question.multi_select and isinstance(answer, list):
            violations.append(
                SchemaViolation(
                    ViolationCode.WRONG_ANSWER_KIND,
                    f"answers.{header}",
                    "Single-select question must be answered with a string",
                )
            )

    if not response.is_cancelled:
        for header in questions:
            if header not in response.answers:
                violations.append(
                    SchemaViolation(
                        ViolationCode.MISSING_ANSWER,
                        f"answers.{header}",
                        f"Question {header!r} was not answered",
                    )
                )

    return violations


def ensure_answers_consistent(
    request: AskUserQuestionInput,
    response: AskUserQuestionResponse,
) -> None:
    """Raise SchemaViolationError if *response* does not answer *request*."""
    violations = check_answers_consistency(request, response)
    if violations:
        raise SchemaViolationError(
            "AskUserQuestion response does not match request: "
            + "; ".join(str(v) for v in violations),
            violations,
            schema="AskUserQuestion response",
        )
