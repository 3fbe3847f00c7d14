"""Shared dependencies for the FastAPI web layer."""

from fastapi import Header, HTTPException

from execution.completion import area_summaries, score_project
from execution.project_store import load_project
from execution.room_templates import get_template


def get_current_user_id(x_user_id: str | None = Header(None)) -> str:
    """Return the authenticated user id, or raise 401.

    Session handling lives in front of this service; it forwards the
    resolved user as the X-User-Id header.
    """
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Unauthorized")
    return x_user_id.strip()


def get_project_or_404(project_id: str, user_id: str) -> dict:
    """Load a project owned by user_id or raise 404."""
    try:
        return load_project(project_id, user_id)
    except FileNotFoundError:
        raise HTTPException(status_code=404, detail="Project not found")


def with_completion(project: dict) -> dict:
    """Return a copy of the project with its completion percentage."""
    return {**project, "completion": score_project(project)}


def with_details(project: dict) -> dict:
    """Return the project with completion, per-area summaries and its template."""
    return {
        **with_completion(project),
        "areas": area_summaries(project),
        "template": get_template(project.get("template_id")),
    }
