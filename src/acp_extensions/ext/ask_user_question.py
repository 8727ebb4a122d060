"""AskUserQuestion 工具桥接 — 通过客户端 UI 向用户提问。

Bridge between the agent's ``mcp__acp__AskUserQuestion`` tool and the
client's ``_claude-acp/askUserQuestion`` method.

The bridge is stateless apart from the session's negotiated capabilities:

    active = get_active_custom_capabilities(client_capabilities)
    bridge = AskUserQuestionBridge(connection, active)
    tool = bridge.tool_definition()
    # ... model calls the tool ...
    response = await bridge.ask(session_id, call["arguments"]["questions"])
    result = bridge.tool_result(call["id"], response)
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from acp_extensions.capabilities.definition import CapabilityDefinition, CapabilityId
from acp_extensions.errors import CapabilityNotActiveError, RegistryError
from acp_extensions.protocol.namespace import prefer_acp_tool_instruction
from acp_extensions.registry import CapabilityRegistry, get_registry
from acp_extensions.routing import ActiveCapabilitiesResult
from acp_extensions.schemas.ask_user_question import (
    AskUserQuestionInput,
    AskUserQuestionRequest,
    AskUserQuestionResponse,
    ensure_answers_consistent,
    validate_ask_user_question_response,
)
from acp_extensions.telemetry import get_logger, session_log_context

logger = get_logger(__name__)

_TOOL_DESCRIPTION = (
    "Ask the user 1-4 multiple-choice questions to gather preferences, "
    "clarify ambiguous instructions, or choose between implementation options."
)


@runtime_checkable
class ExtMethodSender(Protocol):
    """Anything that can send an ACP extension request to the client."""

    async def ext_method(self, method: str, params: dict[str, Any]) -> dict[str, Any]: ...


class AskUserQuestionBridge:
    """Routes AskUserQuestion tool calls through the client UI."""

    def __init__(
        self,
        sender: ExtMethodSender,
        active: ActiveCapabilitiesResult,
        registry: CapabilityRegistry | None = None,
    ) -> None:
        registry = registry if registry is not None else get_registry()
        definition = registry.get(CapabilityId.ASK_USER_QUESTION)
        if definition is None:
            raise RegistryError(
                "AskUserQuestion is not registered",
                capability_id=CapabilityId.ASK_USER_QUESTION.value,
            )
        self._sender = sender
        self._active = active
        self._definition = definition

    @property
    def definition(self) -> CapabilityDefinition:
        return self._definition

    @property
    def is_available(self) -> bool:
        """Whether the client advertised support for this session."""
        return self._active.is_active(self._definition.id)

    @property
    def method_name(self) -> str:
        return self._definition.method_name

    def tool_description(self) -> str:
        return f"{_TOOL_DESCRIPTION} {prefer_acp_tool_instruction(self._definition.tool)}"

    def tool_definition(self) -> dict[str, Any]:
        """Function-tool definition exposed to the model."""
        return {
            "type": "function",
            "function": {
                "name": self._definition.qualified_tool,
                "description": self.tool_description(),
                "parameters": AskUserQuestionInput.model_json_schema(by_alias=True),
            },
        }

    async def ask(
        self,
        session_id: str,
        questions: AskUserQuestionInput | list[Any],
    ) -> AskUserQuestionResponse:
        """Ask the user and return their validated answers.

        Raises:
            CapabilityNotActiveError: Client did not advertise the capability
            SchemaViolationError: Request or response broke the schema
        """
        if not self.is_available:
            raise CapabilityNotActiveError(
                "Client did not advertise AskUserQuestion support",
                capability_id=self._definition.id,
                method=self.method_name,
            ).with_hint(
                f"Client must set _meta['claude-acp'].{self._definition.path} = true"
            )

        with session_log_context(session_id):
            request = AskUserQuestionRequest.for_session(session_id, questions)
            logger.debug(
                "Sending custom method",
                method=self.method_name,
                headers=request.headers(),
            )

            raw = await self._sender.ext_method(self.method_name, request.to_wire())
            response = validate_ask_user_question_response(raw)
            ensure_answers_consistent(request, response)

            logger.debug(
                "Custom method answered",
                method=self.method_name,
                cancelled=response.is_cancelled,
            )
        return response

    def tool_result(
        self,
        tool_call_id: str,
        response: AskUserQuestionResponse,
    ) -> dict[str, Any]:
        """Convert the user's answers to a tool result for the model."""
        if response.is_cancelled:
            return {
                "tool_use_id": tool_call_id,
                "content": "User declined to answer the questions.",
                "is_error": False,
            }

        parts = []
        for header, answer in response.answers.items():
            value = ", ".join(answer) if isinstance(answer, list) else answer
            parts.append(f'"{header}"="{value}"')
        return {
            "tool_use_id": tool_call_id,
            "content": (
                "User has answered your questions: "
                + ", ".join(parts)
                + ". You can now continue with the user's answers in mind."
            ),
            "is_error": False,
        }
