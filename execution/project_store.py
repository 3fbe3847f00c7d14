"""File-backed project store.

Manages project record JSON files: create, load, save, list, update, delete,
area patch application and conversation notes. One file per project under
OUTPUT_DIR/projects, written atomically. Every read is scoped to the owning
user; a project owned by someone else is reported as not found.
"""

import json
import logging
import os
import re
import tempfile
import uuid
from datetime import date, datetime, timezone
from pathlib import Path

from config.settings import DEFAULT_STATUS, OUTPUT_DIR
from execution.detail_merger import merge_areas
from execution.project_validator import require_valid_project_data
from execution.schema_validator import get_project_validation_errors

logger = logging.getLogger(__name__)

# Fields a caller may overwrite through update_project()
UPDATABLE_FIELDS = (
    "name",
    "description",
    "location",
    "template_id",
    "status",
    "budget_min",
    "budget_max",
    "start_date",
    "target_completion_date",
    "project_details",
    "conversation_updates",
)

_PROJECT_ID_RE = re.compile(r"^[0-9a-f]{32}$")


def _now() -> str:
    """Return current UTC time as ISO 8601 string."""
    return datetime.now(timezone.utc).isoformat()


def _projects_dir() -> Path:
    return OUTPUT_DIR / "projects"


def _project_path(project_id: str) -> Path:
    """Return the path to a project's file, rejecting malformed ids."""
    if not isinstance(project_id, str) or not _PROJECT_ID_RE.match(project_id):
        raise FileNotFoundError(f"Project '{project_id}' not found")
    return _projects_dir() / f"{project_id}.json"


def _read(path: Path) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def create_project(
    user_id: str,
    name: str,
    description: str | None = None,
    location: str | None = None,
    template_id: str | None = None,
    budget_min: float | None = None,
    budget_max: float | None = None,
    start_date: str | None = None,
    target_completion_date: str | None = None,
    project_details: list[dict] | None = None,
    status: str = DEFAULT_STATUS,
) -> dict:
    """Create and persist a new project record.

    Args:
        user_id: Owner of the project.
        name: Human-readable project name.
        project_details: Initial areas, usually seeded from a template.

    Returns:
        The stored project dictionary.

    Raises:
        ValueError: If the data fails validation.
    """
    now = _now()
    project = {
        "id": uuid.uuid4().hex,
        "user_id": user_id,
        "name": name.strip() if isinstance(name, str) else name,
        "description": description or None,
        "location": location or None,
        "template_id": template_id or None,
        "status": status,
        "budget_min": budget_min,
        "budget_max": budget_max,
        "start_date": start_date or None,
        "target_completion_date": target_completion_date or None,
        "project_details": list(project_details or []),
        "conversation_updates": [],
        "created_at": now,
        "updated_at": now,
    }
    require_valid_project_data(project)
    save_project(project)
    logger.info("Created project %s for user %s", project["id"], user_id)
    return project


def load_project(project_id: str, user_id: str) -> dict:
    """Load a project owned by user_id.

    Raises:
        FileNotFoundError: If the project does not exist or belongs to
            another user.
        json.JSONDecodeError: If the file contains invalid JSON.
    """
    path = _project_path(project_id)
    if not path.exists():
        raise FileNotFoundError(f"Project '{project_id}' not found")
    project = _read(path)
    if project.get("user_id") != user_id:
        raise FileNotFoundError(f"Project '{project_id}' not found")
    return project


def save_project(project: dict) -> None:
    """Write a project to its JSON file with atomic write (temp, then rename).

    Args:
        project: The project dictionary to save. Its 'updated_at' is stamped.

    Raises:
        ValueError: If the record does not match the project schema or its
            budget bounds are inverted.
    """
    project["updated_at"] = _now()

    errors = get_project_validation_errors(project)
    if errors:
        raise ValueError(f"Invalid project record: {'; '.join(errors)}")
    # Partial updates only validate the fields they carry; the bounds are
    # checked again on the merged record.
    require_valid_project_data({k: project.get(k) for k in ("budget_min", "budget_max")})

    path = _project_path(project["id"])
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_path = tempfile.mkstemp(
        dir=str(path.parent), suffix=".tmp", prefix="project_"
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(project, f, indent=2, ensure_ascii=False)
        os.replace(tmp_path, str(path))
    except Exception:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise


def list_projects(user_id: str, order_by: str = "created_at", descending: bool = False) -> list[dict]:
    """Return every project owned by user_id, sorted by a timestamp field.

    Unreadable files are skipped with a warning.
    """
    projects = []
    directory = _projects_dir()
    if not directory.exists():
        return projects
    for path in directory.glob("*.json"):
        try:
            project = _read(path)
        except (OSError, ValueError) as e:
            logger.warning("Skipping unreadable project file %s: %s", path.name, e)
            continue
        if project.get("user_id") == user_id:
            projects.append(project)
    projects.sort(key=lambda p: p.get(order_by) or "", reverse=descending)
    return projects


def has_any_project(user_id: str) -> bool:
    """Check whether user_id owns at least one project."""
    return len(list_projects(user_id)) > 0


def update_project(project_id: str, user_id: str, updates: dict) -> dict:
    """Overwrite the given fields of a project and persist it.

    Only UPDATABLE_FIELDS are applied; a supplied name is stripped.

    Raises:
        FileNotFoundError: If the project is not found for this user.
        ValueError: If the updates fail validation.
    """
    fields = {k: v for k, v in updates.items() if k in UPDATABLE_FIELDS}
    if isinstance(fields.get("name"), str):
        fields["name"] = fields["name"].strip()
    require_valid_project_data(fields)

    project = load_project(project_id, user_id)
    project.update(fields)
    save_project(project)
    logger.info("Updated project %s fields: %s", project_id, sorted(fields))
    return project


def apply_area_patches(project: dict, patches: list[tuple[str, dict]]) -> dict:
    """Merge area patches into a project's areas (in memory).

    Args:
        project: The project dictionary.
        patches: Ordered (area_name, partial_details) pairs.

    Returns:
        The updated project dictionary.
    """
    current = project.get("project_details")
    if not isinstance(current, list):
        current = []
    project["project_details"] = merge_areas(current, patches)
    return project


def patch_project_details(
    project_id: str,
    user_id: str,
    patches: list[tuple[str, dict]],
    fields: dict | None = None,
) -> dict:
    """Merge area patches and overwrite extra fields in one read-modify-write.

    Args:
        project_id: The project to change.
        user_id: The owner.
        patches: Ordered (area_name, partial_details) pairs.
        fields: Other project fields to overwrite (UPDATABLE_FIELDS only;
            'project_details' is ignored here).

    Returns:
        The saved project dictionary.

    Raises:
        FileNotFoundError: If the project is not found for this user.
        ValueError: If the fields fail validation.
    """
    fields = {
        k: v for k, v in (fields or {}).items()
        if k in UPDATABLE_FIELDS and k != "project_details"
    }
    if isinstance(fields.get("name"), str):
        fields["name"] = fields["name"].strip()
    require_valid_project_data(fields)

    project = load_project(project_id, user_id)
    project.update(fields)
    apply_area_patches(project, patches)
    save_project(project)
    logger.info(
        "Patched project %s: %d area update(s), fields %s",
        project_id, len(patches), sorted(fields),
    )
    return project


def record_conversation_update(project: dict, text: str, today: date | None = None) -> dict:
    """Append a dated bullet note summarizing a conversation decision.

    Args:
        project: The project dictionary.
        text: The note text.
        today: Date stamp to use (defaults to the current UTC date).

    Returns:
        The updated project dictionary.
    """
    stamp = (today or datetime.now(timezone.utc).date()).isoformat()
    notes = project.get("conversation_updates")
    if not isinstance(notes, list):
        notes = []
    project["conversation_updates"] = [*notes, f"• {text} ({stamp})"]
    return project


def delete_project(project_id: str, user_id: str) -> bool:
    """Delete a project file.

    Returns:
        True if the project was deleted, False if it did not exist for this user.
    """
    try:
        load_project(project_id, user_id)
    except FileNotFoundError:
        return False
    _project_path(project_id).unlink()
    logger.info("Deleted project %s for user %s", project_id, user_id)
    return True
