"""Project tools exposed to the chat assistant.

Each tool takes the calling user's id plus typed arguments (pydantic models
decoded from the model's function-call JSON) and returns a JSON-safe dict:
{'success': True, ..., 'message': str} or {'success': False, 'error': str}.
Tools never raise; store and validation failures become error results the
assistant can read back to the user.
"""

import json
import logging
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError

from config.settings import LIST_PROJECTS_CACHE_TTL
from execution import project_store
from execution.completion import area_summaries, completion_message, score_project
from execution.project_validator import validate_project_data
from execution.request_cache import TTLCache
from execution.room_templates import (
    find_template_by_category,
    get_template,
    initial_rooms_for_template,
)

logger = logging.getLogger(__name__)

_listing_cache = TTLCache(LIST_PROJECTS_CACHE_TTL)


# ---------------------------------------------------------------------------
# Tool argument models
# ---------------------------------------------------------------------------


class CreateProjectArgs(BaseModel):
    name: str = Field(
        ...,
        description="The name of the project (e.g., 'Kitchen Remodel', 'Master Bathroom Renovation')",
    )
    projectType: str = Field(
        ...,
        description=(
            "The type of project: 'kitchen', 'bathroom', 'living_room', "
            "'bedroom', 'whole_house', or 'outdoor'"
        ),
    )
    description: str | None = Field(None, description="Optional description of the project")
    location: str | None = Field(None, description="Location/address of the project")


class AreaUpdate(BaseModel):
    areaName: str
    details: dict[str, Any] = Field(
        default_factory=dict, description="Area-specific details to update"
    )


class ProjectUpdates(BaseModel):
    name: str | None = None
    description: str | None = None
    location: str | None = None
    status: Literal["planning", "in_progress", "completed", "on_hold"] | None = None
    projectUpdates: list[AreaUpdate] | None = Field(
        None, description="Updates to specific project area details"
    )
    conversationUpdate: str | None = Field(
        None, description="A bulleted update to record from this conversation"
    )


class UpdateProjectArgs(BaseModel):
    projectId: str = Field(..., description="The ID of the project to update")
    updates: ProjectUpdates


class ListProjectsArgs(BaseModel):
    pass


class GetProjectDetailsArgs(BaseModel):
    projectId: str = Field(..., description="The ID of the project to retrieve")


def _error(message: str) -> dict:
    return {"success": False, "error": message}


def _area_names(project: dict) -> list[str]:
    areas = project.get("project_details")
    if not isinstance(areas, list):
        return []
    return [a.get("name") for a in areas if isinstance(a, dict)]


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------


def create_project(user_id: str, args: CreateProjectArgs) -> dict:
    """Create a project seeded with the rooms of the matching category template."""
    logger.info("Creating project for user %s: %s (%s)", user_id, args.name, args.projectType)

    validation = validate_project_data({"name": args.name, "description": args.description})
    if not validation["valid"]:
        return _error(f"Validation failed: {', '.join(validation['errors'])}")

    template = find_template_by_category(args.projectType)
    rooms = initial_rooms_for_template(template, args.projectType)

    try:
        project = project_store.create_project(
            user_id,
            args.name,
            description=args.description,
            location=args.location,
            template_id=template["id"] if template else None,
            project_details=rooms,
        )
    except (OSError, ValueError) as e:
        logger.error("Project creation failed for user %s: %s", user_id, e)
        return _error(f"Failed to create project: {e}")
    _listing_cache.invalidate_user(user_id)

    template_name = template["name"] if template else None
    return {
        "success": True,
        "project": {
            "id": project["id"],
            "name": project["name"],
            "type": args.projectType,
            "status": project["status"],
            "project_details": _area_names(project),
            "template": template_name,
        },
        "message": (
            f'Successfully created "{project["name"]}" project! I\'ve set up the '
            f"initial project structure based on a {template_name or 'general'} "
            "template. Let's start gathering information about your project details."
        ),
    }


def update_project(user_id: str, args: UpdateProjectArgs) -> dict:
    """Apply basic field changes, area patches and a conversation note."""
    updates = args.updates
    logger.info("Updating project %s for user %s", args.projectId, user_id)

    try:
        project = project_store.load_project(args.projectId, user_id)
    except (OSError, ValueError):
        return _error("Project not found")

    fields = {
        key: getattr(updates, key)
        for key in ("name", "description", "location", "status")
        if getattr(updates, key)
    }
    validation = validate_project_data(fields)
    if not validation["valid"]:
        return _error(f"Validation failed: {', '.join(validation['errors'])}")
    project.update(fields)

    if updates.projectUpdates:
        patches = [(u.areaName, u.details) for u in updates.projectUpdates]
        logger.debug("Merging area updates into %s: %s", args.projectId, patches)
        project_store.apply_area_patches(project, patches)

    if updates.conversationUpdate:
        project_store.record_conversation_update(project, updates.conversationUpdate)

    try:
        project_store.save_project(project)
    except (OSError, ValueError) as e:
        logger.error("Project update failed for %s: %s", args.projectId, e)
        return _error(f"Failed to update project: {e}")
    _listing_cache.invalidate_user(user_id)

    completion = score_project(project)
    return {
        "success": True,
        "project": {
            "id": project["id"],
            "name": project["name"],
            "status": project["status"],
            "completion": completion,
            "lastUpdated": project["updated_at"],
        },
        "message": f"Project information updated successfully! {completion_message(project['name'], completion)}",
    }


def _project_summary(project: dict) -> dict:
    template = get_template(project.get("template_id"))
    return {
        "id": project["id"],
        "name": project["name"],
        "description": project.get("description"),
        "status": project.get("status"),
        "location": project.get("location"),
        "budget": {"min": project.get("budget_min"), "max": project.get("budget_max")},
        "targetDate": project.get("target_completion_date"),
        "rooms": _area_names(project),
        "completion": score_project(project),
        "template": template["name"] if template else None,
        "category": template["category"] if template else None,
        "created": project.get("created_at"),
        "updated": project.get("updated_at"),
    }


def _scan_projects(user_id: str) -> list[dict]:
    projects = project_store.list_projects(user_id, order_by="updated_at", descending=True)
    return [_project_summary(p) for p in projects]


def list_projects(user_id: str, args: ListProjectsArgs | None = None) -> dict:
    """List the user's projects, most recently updated first."""
    logger.info("Listing projects for user %s", user_id)
    try:
        summaries = _listing_cache.get_or_compute(
            (user_id, "listProjects"), lambda: _scan_projects(user_id)
        )
    except OSError as e:
        logger.error("Failed to list projects for user %s: %s", user_id, e)
        return _error(f"Failed to list projects: {e}")

    if summaries:
        count = len(summaries)
        listed = ", ".join(
            f'"{p["name"]}" ({p["status"]}, {p["completion"]}% complete)' for p in summaries
        )
        message = f"Found {count} existing project{'' if count == 1 else 's'}: {listed}"
    else:
        message = (
            "No existing projects found. You can create a new project when the "
            "user mentions starting a renovation."
        )
    return {"success": True, "projects": summaries, "message": message}


def get_project_details(user_id: str, args: GetProjectDetailsArgs) -> dict:
    """Return a project's completion, per-area gaps and key facts."""
    logger.info("Getting project details for %s (user %s)", args.projectId, user_id)
    try:
        project = project_store.load_project(args.projectId, user_id)
    except (OSError, ValueError):
        return _error("Project not found")

    template = get_template(project.get("template_id"))
    completion = score_project(project)
    return {
        "success": True,
        "project": {
            "id": project["id"],
            "name": project["name"],
            "description": project.get("description"),
            "status": project.get("status"),
            "location": project.get("location"),
            "budget": {"min": project.get("budget_min"), "max": project.get("budget_max")},
            "timeline": {
                "start": project.get("start_date"),
                "completion": project.get("target_completion_date"),
            },
            "template": template["name"] if template else None,
            "category": template["category"] if template else None,
            "completion": completion,
            "areas": [
                {
                    "name": a["name"],
                    "completion": a["completion"],
                    "missingInfo": a["missing_info"],
                }
                for a in area_summaries(project)
            ],
            "conversationUpdates": project.get("conversation_updates", []),
            "createdAt": project.get("created_at"),
            "lastUpdated": project.get("updated_at"),
        },
        "message": completion_message(project["name"], completion),
    }


# ---------------------------------------------------------------------------
# Registry and dispatch
# ---------------------------------------------------------------------------

TOOLS = {
    "createProject": (
        CreateProjectArgs,
        create_project,
        "Creates a new home remodeling project for the user. Use this when a user "
        "mentions starting a new renovation, remodel, or home improvement project.",
    ),
    "updateProject": (
        UpdateProjectArgs,
        update_project,
        "Updates project information based on user conversation. Use this to save "
        "project details as the user provides them.",
    ),
    "listProjects": (
        ListProjectsArgs,
        list_projects,
        "Lists all existing projects for the user. Use this to see what projects are "
        "already created and avoid duplicates, or to reference existing projects in "
        "conversation.",
    ),
    "getProjectDetails": (
        GetProjectDetailsArgs,
        get_project_details,
        "Retrieves current project details and completion status. Use this to check "
        "what information is known about a project.",
    ),
}


def tool_definitions(names: list[str] | None = None) -> list[dict]:
    """Return OpenAI function-calling definitions for the named tools (all by default)."""
    definitions = []
    for name in names if names is not None else list(TOOLS):
        model, _handler, description = TOOLS[name]
        definitions.append({
            "type": "function",
            "function": {
                "name": name,
                "description": description,
                "parameters": model.model_json_schema(),
            },
        })
    return definitions


def execute_tool(name: str, arguments: str | dict | None, user_id: str) -> dict:
    """Decode, validate and run one tool call.

    Args:
        name: Tool name as registered in TOOLS.
        arguments: JSON string (as sent by the model) or an already-decoded dict.
        user_id: The calling user.

    Returns:
        The tool's result dict, or an error result.
    """
    if name not in TOOLS:
        return _error(f"Unknown tool: {name}")
    model, handler, _description = TOOLS[name]

    if isinstance(arguments, str):
        try:
            arguments = json.loads(arguments) if arguments.strip() else {}
        except json.JSONDecodeError as e:
            return _error(f"Invalid arguments for {name}: {e}")
    try:
        args = model.model_validate(arguments or {})
    except ValidationError as e:
        return _error(f"Invalid arguments for {name}: {e.errors()[0]['msg']}")

    result = handler(user_id, args)
    logger.info("Tool %s finished: success=%s", name, result.get("success"))
    return result


def clear_listing_cache() -> None:
    """Forget all cached project listings."""
    _listing_cache.clear()


def invalidate_listing_cache(user_id: str) -> None:
    """Forget cached project listings for one user after a write."""
    _listing_cache.invalidate_user(user_id)
