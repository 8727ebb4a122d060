"""Root pytest fixtures for acp-extensions tests."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import pytest

from acp_extensions.registry import set_registry


@pytest.fixture(autouse=True)
def _fresh_registry(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Restore the built-in process registry per test, ignoring the caller's env."""
    monkeypatch.delenv("ACP_EXT_REGISTRY_FILE", raising=False)
    set_registry(None)
    yield
    set_registry(None)


@pytest.fixture
def ask_caps() -> dict[str, Any]:
    """Client capabilities advertising AskUserQuestion."""
    return {"_meta": {"claude-acp": {"ui": {"askUserQuestion": True}}}}


@pytest.fixture
def sample_question() -> dict[str, Any]:
    """A valid single-select question in wire format."""
    return {
        "question": "Which database should the service use?",
        "header": "Database",
        "options": [
            {"label": "Postgres", "description": "Relational, already in the stack"},
            {"label": "SQLite", "description": "Embedded, zero setup"},
        ],
        "multiSelect": False,
    }


@pytest.fixture
def multi_question() -> dict[str, Any]:
    """A valid multi-select question in wire format."""
    return {
        "question": "Which checks should run in CI?",
        "header": "CI checks",
        "options": [
            {"label": "Lint", "description": "Static style checks"},
            {"label": "Tests", "description": "Unit test suite"},
            {"label": "Types", "description": "Type checking"},
        ],
        "multiSelect": True,
    }
