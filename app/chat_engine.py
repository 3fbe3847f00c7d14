"""Chat conversation engine for the remodeling assistant.

Prepares one assistant turn: picks the system prompt and the tool set for
this turn, then streams the model's reply while it creates, reads and
updates project records through the project tools.
"""

import logging
from typing import Generator

from config.settings import FIRST_TURN_MAX_STEPS, MAX_TOOL_STEPS
from execution.llm_client import (
    ChatEvent,
    LLMClientError,
    LLMUnavailableError,
    stream_chat_with_tools,
)
from execution.project_store import has_any_project
from execution.project_tools import TOOLS, execute_tool, tool_definitions
from execution.prompts import HAS_PROJECTS_CONTEXT, NO_PROJECTS_CONTEXT, SYSTEM_PROMPT_DEFAULT

logger = logging.getLogger(__name__)


def is_first_user_turn(messages: list[dict]) -> bool:
    """True when the conversation holds exactly one user message."""
    return sum(1 for m in messages if m.get("role") == "user") == 1


def build_system_prompt(
    base_prompt: str | None,
    is_first_turn: bool,
    has_projects: bool | None,
) -> str:
    """Return the system prompt, with a project-context note on the first turn.

    has_projects is None when the project check could not be made; no note
    is added then.
    """
    prompt = base_prompt or SYSTEM_PROMPT_DEFAULT
    if not is_first_turn or has_projects is None:
        return prompt
    note = HAS_PROJECTS_CONTEXT if has_projects else NO_PROJECTS_CONTEXT
    return f"{prompt}\n\n{note}"


def select_tools(is_first_turn: bool, has_projects: bool | None) -> list[str]:
    """Tool names enabled for this turn.

    listProjects is dropped on a first turn when the user has no projects.
    """
    names = list(TOOLS)
    if is_first_turn and has_projects is False:
        names.remove("listProjects")
    return names


def max_steps_for(is_first_turn: bool) -> int:
    return FIRST_TURN_MAX_STEPS if is_first_turn else MAX_TOOL_STEPS


def _check_projects(user_id: str) -> bool | None:
    try:
        return has_any_project(user_id)
    except OSError as e:
        logger.warning("First-turn project check failed for %s: %s", user_id, e)
        return None


def run_chat(
    user_id: str,
    messages: list[dict],
    system_prompt: str | None = None,
    model: str | None = None,
) -> Generator[ChatEvent, None, None]:
    """Stream one assistant turn for user_id.

    Args:
        user_id: The authenticated user; every tool call is scoped to it.
        messages: The conversation so far as {'role', 'content'} dicts.
        system_prompt: Optional override of the default system prompt.
        model: Optional model override.

    Yields:
        ChatEvent objects. LLM failures end the stream with an 'error' event.
    """
    first_turn = is_first_user_turn(messages)
    has_projects = _check_projects(user_id) if first_turn else None
    if first_turn:
        logger.info("First turn project check for %s: has_projects=%s", user_id, has_projects)

    prompt = build_system_prompt(system_prompt, first_turn, has_projects)
    tool_names = select_tools(first_turn, has_projects)
    logger.info("Tools enabled this turn: %s", tool_names)

    def executor(name: str, arguments: str) -> dict:
        if name not in tool_names:
            return {"success": False, "error": f"Tool {name} is not available this turn"}
        return execute_tool(name, arguments, user_id)

    try:
        yield from stream_chat_with_tools(
            prompt,
            messages,
            tool_definitions(tool_names),
            executor,
            max_steps_for(first_turn),
            model=model,
        )
    except LLMUnavailableError as e:
        logger.warning("Chat unavailable: %s", e)
        yield ChatEvent("error", {"message": str(e)})
    except LLMClientError as e:
        logger.error("Chat streaming failed for %s: %s", user_id, e)
        yield ChatEvent("error", {"message": str(e)})
