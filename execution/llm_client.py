"""Thin wrapper around the OpenAI SDK for streamed, tool-using chat turns.

All business logic lives elsewhere: tool execution is delegated to a
caller-supplied executor, and this module only handles the API transport,
tool-call plumbing, error wrapping, and availability checks.
"""

import json
from dataclasses import asdict, dataclass, field
from typing import Callable, Generator

from config.settings import LLM_MAX_TOKENS, LLM_MODEL, LLM_TEMPERATURE, OPENAI_API_KEY


class LLMUnavailableError(Exception):
    """Raised when the LLM service is not configured or reachable."""


class LLMClientError(Exception):
    """Raised when the LLM API returns an error."""


@dataclass
class ChatEvent:
    """One event of a streamed, tool-using conversation turn."""

    event_type: str       # "text", "tool_call", "tool_result", "finish", "error"
    data: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return asdict(self)


ToolExecutor = Callable[[str, str], dict]


def is_available() -> bool:
    """Check if the OpenAI API key is configured."""
    return bool(OPENAI_API_KEY)


def _import_openai():
    if not is_available():
        raise LLMUnavailableError("OPENAI_API_KEY is not configured")
    try:
        import openai
    except ImportError as e:
        raise LLMUnavailableError(
            "openai package is not installed. Run: pip install openai"
        ) from e
    return openai


def _accumulate_tool_call(calls: dict, fragment) -> None:
    """Merge one streamed tool-call fragment into calls (keyed by index)."""
    slot = calls.setdefault(fragment.index, {"id": "", "name": "", "arguments": ""})
    if fragment.id:
        slot["id"] = fragment.id
    function = fragment.function
    if function is not None:
        if function.name:
            slot["name"] += function.name
        if function.arguments:
            slot["arguments"] += function.arguments


def stream_chat_with_tools(
    system_prompt: str,
    messages: list[dict],
    tools: list[dict],
    tool_executor: ToolExecutor,
    max_steps: int,
    model: str | None = None,
    max_tokens: int | None = None,
    temperature: float | None = None,
) -> Generator[ChatEvent, None, None]:
    """Stream a conversation turn, running tool calls until the model stops.

    Each step is one streamed completion. When a step ends with tool calls,
    every call is executed through tool_executor(name, arguments_json), the
    results are appended as tool messages, and the next step starts. The loop
    ends when the model answers without tool calls or after max_steps steps.

    Args:
        system_prompt: The system instruction for the conversation.
        messages: Prior conversation as OpenAI message dicts.
        tools: OpenAI function-calling tool definitions (may be empty).
        tool_executor: Runs a tool and returns a JSON-serializable result.
        max_steps: Maximum number of model calls in this turn.

    Yields:
        ChatEvent objects: 'text' deltas, 'tool_call' and 'tool_result' per
        call, then one 'finish'.

    Raises:
        LLMUnavailableError: If no API key is configured.
        LLMClientError: If an API call fails.
    """
    openai = _import_openai()

    model = model or LLM_MODEL
    max_tokens = max_tokens or LLM_MAX_TOKENS
    temperature = temperature if temperature is not None else LLM_TEMPERATURE

    conversation = [{"role": "system", "content": system_prompt}]
    conversation.extend(messages)
    client = openai.OpenAI(api_key=OPENAI_API_KEY)

    for step in range(1, max_steps + 1):
        create_kwargs = {
            "model": model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": conversation,
            "stream": True,
        }
        if tools:
            create_kwargs["tools"] = tools
            create_kwargs["tool_choice"] = "auto"

        text_parts = []
        calls: dict[int, dict] = {}
        finish_reason = None
        try:
            for chunk in client.chat.completions.create(**create_kwargs):
                if not chunk.choices:
                    continue
                choice = chunk.choices[0]
                delta = choice.delta
                if delta.content:
                    text_parts.append(delta.content)
                    yield ChatEvent("text", {"delta": delta.content})
                for fragment in delta.tool_calls or []:
                    _accumulate_tool_call(calls, fragment)
                if choice.finish_reason:
                    finish_reason = choice.finish_reason
        except openai.APIError as e:
            raise LLMClientError(f"OpenAI API error: {e}") from e
        except Exception as e:
            raise LLMClientError(f"LLM call failed: {e}") from e

        if not calls:
            yield ChatEvent("finish", {"reason": finish_reason or "stop", "steps": step})
            return

        ordered = [calls[i] for i in sorted(calls)]
        conversation.append({
            "role": "assistant",
            "content": "".join(text_parts) or None,
            "tool_calls": [
                {
                    "id": call["id"],
                    "type": "function",
                    "function": {"name": call["name"], "arguments": call["arguments"]},
                }
                for call in ordered
            ],
        })
        for call in ordered:
            yield ChatEvent("tool_call", {
                "id": call["id"],
                "name": call["name"],
                "arguments": call["arguments"],
            })
            result = tool_executor(call["name"], call["arguments"])
            yield ChatEvent("tool_result", {
                "id": call["id"],
                "name": call["name"],
                "result": result,
            })
            conversation.append({
                "role": "tool",
                "tool_call_id": call["id"],
                "content": json.dumps(result, ensure_ascii=False),
            })

    yield ChatEvent("finish", {"reason": "max_steps", "steps": max_steps})
