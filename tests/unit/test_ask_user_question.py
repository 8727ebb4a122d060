"""Tests for the AskUserQuestion schema."""

from __future__ import annotations

import copy
import json
from typing import Any

import pytest

from acp_extensions.errors import SchemaViolationError
from acp_extensions.schemas import (
    AskUserQuestionInput,
    AskUserQuestionRequest,
    AskUserQuestionResponse,
    SchemaValidator,
    ViolationCode,
    check_answers_consistency,
    check_ask_user_question_input,
    ensure_answers_consistent,
    validate_ask_user_question_input,
    validate_ask_user_question_request,
    validate_ask_user_question_response,
)


def _question(header: str, multi: bool = False) -> dict[str, Any]:
    return {
        "question": f"Pick a value for {header}?",
        "header": header,
        "options": [
            {"label": "A", "description": "First"},
            {"label": "B", "description": "Second"},
        ],
        "multiSelect": multi,
    }


class TestInputValidation:
    def test_minimal_accepted(self, sample_question: dict[str, Any]) -> None:
        parsed = validate_ask_user_question_input({"questions": [sample_question]})
        assert isinstance(parsed, AskUserQuestionInput)
        assert parsed.questions[0].multi_select is False
        assert len(parsed.questions[0].options) == 2
        assert parsed.headers() == ["Database"]

    def test_four_questions_four_options(self) -> None:
        q = _question("Q")
        q["options"] = q["options"] * 2
        payload = {"questions": [dict(q, header=f"Q{i}") for i in range(4)]}
        assert check_ask_user_question_input(payload).valid

    def test_too_many_questions(self) -> None:
        payload = {"questions": [_question(f"Q{i}") for i in range(5)]}
        with pytest.raises(SchemaViolationError) as exc_info:
            validate_ask_user_question_input(payload)
        assert exc_info.value.has(ViolationCode.TOO_MANY_QUESTIONS)

    def test_no_questions(self) -> None:
        result = check_ask_user_question_input({"questions": []})
        assert not result
        assert result.violations[0].code == ViolationCode.TOO_FEW_QUESTIONS
        assert result.violations[0].field_path == "questions"

    def test_header_too_long(self, sample_question: dict[str, Any]) -> None:
        sample_question["header"] = "x" * 13
        with pytest.raises(SchemaViolationError) as exc_info:
            validate_ask_user_question_input({"questions": [sample_question]})
        err = exc_info.value
        assert err.codes() == [ViolationCode.HEADER_TOO_LONG]
        assert err.violations[0].field_path == "questions[0].header"
        assert err.context.field_path == "questions[0].header"

    def test_header_at_limit(self, sample_question: dict[str, Any]) -> None:
        sample_question["header"] = "x" * 12
        assert check_ask_user_question_input({"questions": [sample_question]}).valid

    def test_header_counts_code_points(self, sample_question: dict[str, Any]) -> None:
        # Astral characters count once each, not as two UTF-16 units.
        sample_question["header"] = "\N{PARTY POPPER}" * 12
        assert check_ask_user_question_input({"questions": [sample_question]}).valid
        sample_question["header"] = "\N{PARTY POPPER}" * 13
        result = check_ask_user_question_input({"questions": [sample_question]})
        assert [v.code for v in result.violations] == [ViolationCode.HEADER_TOO_LONG]

    def test_duplicate_headers(self) -> None:
        payload = {"questions": [_question("Scope"), _question("Scope", multi=True)]}
        result = check_ask_user_question_input(payload)
        assert not result.valid
        assert [v.code for v in result.violations] == [ViolationCode.INVALID_VALUE]
        assert result.violations[0].field_path == "questions"
        assert "Scope" in result.violations[0].message

    @pytest.mark.parametrize(
        ("count", "code"),
        [(1, ViolationCode.TOO_FEW_OPTIONS), (5, ViolationCode.TOO_MANY_OPTIONS)],
    )
    def test_option_count(
        self, sample_question: dict[str, Any], count: int, code: ViolationCode
    ) -> None:
        sample_question["options"] = [
            {"label": f"L{i}", "description": f"D{i}"} for i in range(count)
        ]
        result = check_ask_user_question_input({"questions": [sample_question]})
        assert [v.code for v in result.violations] == [code]
        assert result.violations[0].field_path == "questions[0].options"

    @pytest.mark.parametrize(
        ("path", "code"),
        [
            (("question",), ViolationCode.EMPTY_QUESTION),
            (("options", 1, "label"), ViolationCode.EMPTY_LABEL),
            (("options", 0, "description"), ViolationCode.EMPTY_DESCRIPTION),
        ],
    )
    def test_empty_strings(
        self, sample_question: dict[str, Any], path: tuple[Any, ...], code: ViolationCode
    ) -> None:
        target: Any = sample_question
        for key in path[:-1]:
            target = target[key]
        target[path[-1]] = ""
        result = check_ask_user_question_input({"questions": [sample_question]})
        assert [v.code for v in result.violations] == [code]

    def test_multi_select_must_be_boolean(self, sample_question: dict[str, Any]) -> None:
        sample_question["multiSelect"] = "false"
        result = check_ask_user_question_input({"questions": [sample_question]})
        assert [v.code for v in result.violations] == [ViolationCode.INVALID_TYPE]
        assert result.violations[0].field_path == "questions[0].multiSelect"

    def test_missing_field(self, sample_question: dict[str, Any]) -> None:
        del sample_question["header"]
        result = check_ask_user_question_input({"questions": [sample_question]})
        assert [v.code for v in result.violations] == [ViolationCode.MISSING_FIELD]

    def test_all_or_nothing(self, sample_question: dict[str, Any]) -> None:
        bad = copy.deepcopy(sample_question)
        bad["header"] = "a header that is too long"
        bad["options"] = bad["options"][:1]
        result = check_ask_user_question_input({"questions": [sample_question, bad]})
        assert result.data is None
        codes = {v.code for v in result.violations}
        assert codes == {ViolationCode.HEADER_TOO_LONG, ViolationCode.TOO_FEW_OPTIONS}
        assert all(v.field_path.startswith("questions[1]") for v in result.violations)

    @pytest.mark.parametrize("payload", [None, [], "not json", 42])
    def test_not_an_object(self, payload: Any) -> None:
        result = check_ask_user_question_input(payload)
        assert not result.valid
        assert result.violations[0].code in (ViolationCode.INVALID_TYPE, ViolationCode.INVALID_JSON)

    def test_json_string(self, sample_question: dict[str, Any]) -> None:
        result = check_ask_user_question_input(json.dumps({"questions": [sample_question]}))
        assert result.valid
        assert isinstance(result.data, AskUserQuestionInput)

    def test_error_message_lists_violations(self) -> None:
        with pytest.raises(SchemaViolationError, match="too_short|at least 1"):
            validate_ask_user_question_input({"questions": []})

    def test_error_details(self) -> None:
        with pytest.raises(SchemaViolationError) as exc_info:
            validate_ask_user_question_input({"questions": []})
        details = exc_info.value.context.details
        assert details["schema"] == "AskUserQuestion input"
        assert details["violations"][0]["code"] == "too_few_questions"

    def test_wire_aliases(self, sample_question: dict[str, Any]) -> None:
        parsed = validate_ask_user_question_input({"questions": [sample_question]})
        assert parsed.to_wire() == {"questions": [sample_question]}

    def test_json_schema(self) -> None:
        schema = SchemaValidator(AskUserQuestionInput).json_schema()
        assert schema["properties"]["questions"]["maxItems"] == 4
        assert schema["properties"]["questions"]["minItems"] == 1


class TestRequest:
    def test_session_id_required(self, sample_question: dict[str, Any]) -> None:
        with pytest.raises(SchemaViolationError) as exc_info:
            validate_ask_user_question_request({"questions": [sample_question]})
        assert exc_info.value.codes() == [ViolationCode.MISSING_FIELD]

    def test_for_session(self, sample_question: dict[str, Any]) -> None:
        tool_input = validate_ask_user_question_input({"questions": [sample_question]})
        request = AskUserQuestionRequest.for_session("sess-1", tool_input)
        assert request.to_wire() == {"questions": [sample_question], "sessionId": "sess-1"}

    def test_for_session_raw(self, sample_question: dict[str, Any]) -> None:
        request = AskUserQuestionRequest.for_session("sess-1", [sample_question])
        assert request.session_id == "sess-1"


class TestResponse:
    def test_shape(self) -> None:
        response = validate_ask_user_question_response(
            {"answers": {"Database": "Postgres", "CI checks": ["Lint", "Tests"]}}
        )
        assert response.answers["CI checks"] == ["Lint", "Tests"]
        assert response.cancelled is None
        assert not response.is_cancelled
        assert response.to_wire() == {
            "answers": {"Database": "Postgres", "CI checks": ["Lint", "Tests"]}
        }

    def test_cancelled(self) -> None:
        response = validate_ask_user_question_response({"answers": {}, "cancelled": True})
        assert response.is_cancelled

    @pytest.mark.parametrize("payload", [{}, {"cancelled": True}])
    def test_answers_required(self, payload: dict[str, Any]) -> None:
        with pytest.raises(SchemaViolationError) as exc_info:
            validate_ask_user_question_response(payload)
        assert exc_info.value.codes() == [ViolationCode.MISSING_FIELD]
        assert exc_info.value.violations[0].field_path == "answers"

    @pytest.mark.parametrize("answer", [1, None, ["ok", 2], {"label": "x"}])
    def test_bad_answer_value(self, answer: Any) -> None:
        with pytest.raises(SchemaViolationError) as exc_info:
            validate_ask_user_question_response({"answers": {"Database": answer}})
        assert exc_info.value.violations[0].field_path == "answers"


class TestAnswersConsistency:
    def _request(self, *questions: dict[str, Any]) -> AskUserQuestionInput:
        return validate_ask_user_question_input({"questions": list(questions)})

    def test_matching(
        self, sample_question: dict[str, Any], multi_question: dict[str, Any]
    ) -> None:
        request = self._request(sample_question, multi_question)
        response = AskUserQuestionResponse(
            answers={"Database": "Postgres", "CI checks": ["Lint", "Types"]}
        )
        assert check_answers_consistency(request, response) == []
        ensure_answers_consistent(request, response)

    def test_unknown_header(self, sample_question: dict[str, Any]) -> None:
        request = self._request(sample_question)
        response = AskUserQuestionResponse(answers={"Database": "SQLite", "Cache": "Redis"})
        violations = check_answers_consistency(request, response)
        assert [v.code for v in violations] == [ViolationCode.UNKNOWN_HEADER]
        assert violations[0].field_path == "answers.Cache"

    def test_missing_answer(self, sample_question: dict[str, Any]) -> None:
        request = self._request(sample_question)
        violations = check_answers_consistency(request, AskUserQuestionResponse(answers={}))
        assert [v.code for v in violations] == [ViolationCode.MISSING_ANSWER]

    def test_cancelled_may_be_empty(self, sample_question: dict[str, Any]) -> None:
        request = self._request(sample_question)
        response = AskUserQuestionResponse(answers={}, cancelled=True)
        assert check_answers_consistency(request, response) == []

    def test_wrong_kind(
        self, sample_question: dict[str, Any], multi_question: dict[str, Any]
    ) -> None:
        request = self._request(sample_question, multi_question)
        response = AskUserQuestionResponse(
            answers={"Database": ["Postgres"], "CI checks": "Lint"}
        )
        violations = check_answers_consistency(request, response)
        assert [v.code for v in violations] == [ViolationCode.WRONG_ANSWER_KIND] * 2

    def test_ensure_raises(self, sample_question: dict[str, Any]) -> None:
        request = self._request(sample_question)
        response = AskUserQuestionResponse(answers={"Other": "x"})
        with pytest.raises(SchemaViolationError) as exc_info:
            ensure_answers_consistent(request, response)
        assert set(exc_info.value.codes()) == {
            ViolationCode.UNKNOWN_HEADER,
            ViolationCode.MISSING_ANSWER,
        }
