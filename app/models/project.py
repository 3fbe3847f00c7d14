"""Pydantic models for project and chat requests."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from config.settings import MESSAGE_MAX_LENGTH


class CreateProjectRequest(BaseModel):
    name: str = Field(..., max_length=200)
    description: str | None = None
    template_id: str | None = None
    location: str | None = None
    budget_min: float | None = None
    budget_max: float | None = None
    start_date: str | None = None
    target_completion_date: str | None = None


class UpdateProjectRequest(BaseModel):
    """Fields to overwrite; only fields present in the body are applied."""

    name: str | None = Field(None, max_length=200)
    description: str | None = None
    template_id: str | None = None
    status: str | None = None
    budget_min: float | None = None
    budget_max: float | None = None
    start_date: str | None = None
    target_completion_date: str | None = None
    location: str | None = None
    project_details: list[dict[str, Any]] | None = None


class RoomDetailsRequest(BaseModel):
    """PUT body: room name -> partial details, plus other project fields."""

    roomDetails: dict[str, dict[str, Any]] | None = None
    projectSpecifics: dict[str, Any] | None = None


class DetailsPatchRequest(BaseModel):
    """PATCH body: area list to merge; any other keys are project fields."""

    model_config = ConfigDict(extra="allow")

    project_details: list[dict[str, Any]] | None = None


class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str = Field(..., max_length=MESSAGE_MAX_LENGTH)


class ChatRequest(BaseModel):
    messages: list[ChatMessage] = Field(..., min_length=1)
    system_prompt: str | None = None
    model: str | None = None
