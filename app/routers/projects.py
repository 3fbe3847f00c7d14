"""Project routes: list, create, read, update, delete, area details, templates."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from app.dependencies import (
    get_current_user_id,
    get_project_or_404,
    with_completion,
    with_details,
)
from app.models.project import (
    CreateProjectRequest,
    DetailsPatchRequest,
    RoomDetailsRequest,
    UpdateProjectRequest,
)
from execution.detail_merger import patches_from_payload
from execution.project_store import (
    create_project,
    delete_project,
    list_projects,
    patch_project_details,
    update_project,
)
from execution.project_tools import invalidate_listing_cache
from execution.room_templates import (
    get_template,
    group_templates,
    initial_rooms_for_template,
    load_templates,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/projects", tags=["projects"])


@router.get("")
async def list_projects_route(user_id: str = Depends(get_current_user_id)):
    """All of the user's projects, oldest first, with completion."""
    projects = list_projects(user_id, order_by="created_at")
    return JSONResponse(content=[with_completion(p) for p in projects])


@router.post("")
async def create_project_route(
    body: CreateProjectRequest,
    user_id: str = Depends(get_current_user_id),
):
    """Create a project; a template seeds its rooms."""
    if not body.name.strip():
        raise HTTPException(status_code=400, detail="Project name is required")

    rooms = []
    if body.template_id:
        rooms = initial_rooms_for_template(get_template(body.template_id))

    project = create_project(
        user_id,
        body.name,
        description=body.description,
        location=body.location,
        template_id=body.template_id,
        budget_min=body.budget_min,
        budget_max=body.budget_max,
        start_date=body.start_date,
        target_completion_date=body.target_completion_date,
        project_details=rooms,
    )
    invalidate_listing_cache(user_id)
    return JSONResponse(content=with_completion(project))


@router.get("/templates")
async def list_templates_route():
    """Template catalog, flat and grouped by category."""
    templates = load_templates()
    return JSONResponse(content={
        "templates": templates,
        "grouped": group_templates(templates),
    })


@router.get("/{project_id}")
async def get_project_route(project_id: str, user_id: str = Depends(get_current_user_id)):
    project = get_project_or_404(project_id, user_id)
    return JSONResponse(content=with_completion(project))


@router.put("/{project_id}")
async def update_project_route(
    project_id: str,
    body: UpdateProjectRequest,
    user_id: str = Depends(get_current_user_id),
):
    """Overwrite the fields present in the body."""
    project = update_project(project_id, user_id, body.model_dump(exclude_unset=True))
    invalidate_listing_cache(user_id)
    return JSONResponse(content=with_completion(project))


@router.delete("/{project_id}")
async def delete_project_route(project_id: str, user_id: str = Depends(get_current_user_id)):
    if not delete_project(project_id, user_id):
        raise HTTPException(status_code=404, detail="Project not found")
    invalidate_listing_cache(user_id)
    return JSONResponse(content={"success": True})


@router.get("/{project_id}/details")
async def get_project_details_route(project_id: str, user_id: str = Depends(get_current_user_id)):
    """Project with template info, completion and per-area gaps."""
    project = get_project_or_404(project_id, user_id)
    return JSONResponse(content=with_details(project))


@router.put("/{project_id}/details")
async def put_project_details_route(
    project_id: str,
    body: RoomDetailsRequest,
    user_id: str = Depends(get_current_user_id),
):
    """Merge {room name: details} into the areas and apply projectSpecifics."""
    patches = patches_from_payload(body.roomDetails)
    project = patch_project_details(project_id, user_id, patches, body.projectSpecifics)
    invalidate_listing_cache(user_id)
    return JSONResponse(content=with_details(project))


@router.patch("/{project_id}/details")
async def patch_project_details_route(
    project_id: str,
    body: DetailsPatchRequest,
    user_id: str = Depends(get_current_user_id),
):
    """Incremental update: merge the given areas, overwrite any other fields."""
    patches = patches_from_payload(body.project_details)
    fields = dict(body.model_extra or {})
    project = patch_project_details(project_id, user_id, patches, fields)
    invalidate_listing_cache(user_id)
    return JSONResponse(content=with_details(project))
