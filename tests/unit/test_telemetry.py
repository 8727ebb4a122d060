"""Tests for telemetry module."""

from __future__ import annotations

import io
import json
from collections.abc import Iterator

import pytest

from acp_extensions.config import ExtensionConfig
from acp_extensions.telemetry import (
    AcpLogger,
    LogContext,
    LogLevel,
    clear_log_context,
    get_log_context,
    get_logger,
    session_log_context,
    set_log_context,
)


@pytest.fixture(autouse=True)
def _clean_context() -> Iterator[None]:
    clear_log_context()
    yield
    clear_log_context()


class TestLogContext:
    """Tests for LogContext."""

    def test_empty_context(self) -> None:
        assert LogContext().to_dict() == {}

    def test_context_with_fields(self) -> None:
        ctx = LogContext(session_id="sess-1", extra={"client": "zed"})
        assert ctx.to_dict() == {"session_id": "sess-1", "client": "zed"}

    def test_context_with_extra(self) -> None:
        ctx = LogContext(session_id="sess-1").with_extra(active=2)
        assert ctx.to_dict() == {"session_id": "sess-1", "active": 2}

    def test_set_and_get(self) -> None:
        set_log_context(LogContext(session_id="sess-1", extra={"turn": 3}))
        ctx = get_log_context()
        assert ctx.session_id == "sess-1"
        assert ctx.extra == {"turn": 3}

    def test_clear(self) -> None:
        set_log_context(LogContext(session_id="sess-1"))
        clear_log_context()
        assert get_log_context().to_dict() == {}

    def test_session_binding_restored(self) -> None:
        set_log_context(LogContext(extra={"client": "zed"}))
        with session_log_context("sess-2", turn=1) as ctx:
            assert ctx.to_dict() == {"session_id": "sess-2", "client": "zed", "turn": 1}
            assert get_log_context() == ctx
        assert get_log_context().to_dict() == {"client": "zed"}

    def test_session_binding_restored_on_error(self) -> None:
        with pytest.raises(RuntimeError), session_log_context("sess-3"):
            raise RuntimeError("boom")
        assert get_log_context().session_id is None


class TestAcpLogger:
    """Tests for AcpLogger."""

    def test_get_logger(self) -> None:
        logger = get_logger("acp_extensions.test")
        assert logger.name == "acp_extensions.test"

    def test_json_output(self) -> None:
        stream = io.StringIO()
        AcpLogger.configure(level=LogLevel.DEBUG, format="json", stream=stream)
        set_log_context(LogContext(session_id="sess-1"))

        get_logger("acp_extensions.test.json").debug("Resolved", active=["ask_user_question"])

        record = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert record["message"] == "Resolved"
        assert record["level"] == "DEBUG"
        assert record["context"] == {"session_id": "sess-1"}
        assert record["active"] == ["ask_user_question"]

    def test_text_output(self) -> None:
        stream = io.StringIO()
        AcpLogger.configure(level=LogLevel.INFO, format="text", stream=stream)
        logger = get_logger("acp_extensions.test.text")
        logger.debug("hidden")
        logger.info("Shown", method="_claude-acp/askUserQuestion")
        output = stream.getvalue()
        assert "hidden" not in output
        assert "Shown | method=_claude-acp/askUserQuestion" in output

    def test_config_applies_logging(self) -> None:
        ExtensionConfig(log_level=LogLevel.WARNING).apply_logging()
        logger = get_logger("acp_extensions.test.config")
        assert not logger._logger.isEnabledFor(10)
        AcpLogger.configure(level=LogLevel.INFO)
