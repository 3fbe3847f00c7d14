"""Project completion scoring.

Counts how many tracked values of a project hold a concrete answer. The
tracked values are a fixed set of basic project fields plus every leaf of
every area's detail document. Nested mappings are walked recursively; a list
counts as a single leaf that is complete when it is non-empty.

Pure deterministic logic over plain dicts. Never raises on malformed input;
anything it cannot interpret simply contributes nothing.
"""

from typing import Iterator, Mapping, Union

from config.settings import (
    BASIC_FIELDS,
    COMPLETION_NEEDS_INFO_BELOW,
    COMPLETION_WELL_PLANNED_FROM,
    MISSING_INFO_LIMIT,
    UNKNOWN_VALUE,
)

DetailValue = Union[None, bool, int, float, str, list, dict]


def is_known(value: DetailValue) -> bool:
    """Return True if a value counts as a concrete answer.

    None, empty or whitespace-only strings, the "unknown" sentinel (any case)
    and empty lists/mappings are not known. Booleans and numbers always are,
    including False and 0.
    """
    if value is None:
        return False
    if isinstance(value, bool):
        return True
    if isinstance(value, str):
        cleaned = value.strip()
        return bool(cleaned) and cleaned.lower() != UNKNOWN_VALUE
    if isinstance(value, (list, tuple, dict)):
        return len(value) > 0
    return True


def iter_leaves(details: DetailValue, prefix: str = "") -> Iterator[tuple[str, DetailValue]]:
    """Yield (dotted_path, value) for every leaf of a detail document.

    Empty nested mappings have no leaves. A non-mapping document yields
    nothing.
    """
    if not isinstance(details, Mapping):
        return
    for key, value in details.items():
        path = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            yield from iter_leaves(value, path)
        else:
            yield path, value


def _areas(project: Mapping) -> list:
    areas = project.get("project_details")
    return areas if isinstance(areas, list) else []


def _area_details(area) -> Mapping:
    if not isinstance(area, Mapping):
        return {}
    details = area.get("details")
    return details if isinstance(details, Mapping) else {}


def count_fields(project: Mapping, basic_fields: tuple = BASIC_FIELDS) -> tuple[int, int]:
    """Return (completed, total) across basic fields and area leaves.

    Args:
        project: The project record.
        basic_fields: Names of the top-level fields to count.

    Returns:
        Tuple of completed count and total count.
    """
    if not isinstance(project, Mapping):
        return 0, 0

    total = 0
    completed = 0
    for field in basic_fields:
        total += 1
        if is_known(project.get(field)):
            completed += 1

    for area in _areas(project):
        for _path, value in iter_leaves(_area_details(area)):
            total += 1
            if is_known(value):
                completed += 1

    return completed, total


def percent(completed: int, total: int) -> int:
    """Integer percentage rounded half up; 0 when there is nothing to count."""
    if total <= 0:
        return 0
    return (200 * completed + total) // (2 * total)


def score_project(project: Mapping, basic_fields: tuple = BASIC_FIELDS) -> int:
    """Score a project's completion as an integer percentage in [0, 100].

    Args:
        project: The project record (basic fields plus 'project_details').
        basic_fields: Basic fields to count. Callers that need a different
            set must pass it explicitly.

    Returns:
        The completion percentage.
    """
    completed, total = count_fields(project, basic_fields)
    return percent(completed, total)


def area_summaries(project: Mapping, missing_limit: int = MISSING_INFO_LIMIT) -> list[dict]:
    """Return per-area completion with the first few unanswered fields.

    Args:
        project: The project record.
        missing_limit: Maximum number of missing paths reported per area.

    Returns:
        List of dicts with 'name', 'completion' and 'missing_info'.
    """
    summaries = []
    for area in _areas(project):
        if not isinstance(area, Mapping):
            continue
        completed = 0
        total = 0
        missing = []
        for path, value in iter_leaves(_area_details(area)):
            total += 1
            if is_known(value):
                completed += 1
            else:
                missing.append(path)
        summaries.append({
            "name": area.get("name"),
            "completion": percent(completed, total),
            "missing_info": missing[:missing_limit],
        })
    return summaries


def completion_tier(score: int) -> str:
    """Map a completion percentage to 'needs_info', 'in_progress' or 'well_planned'."""
    if score < COMPLETION_NEEDS_INFO_BELOW:
        return "needs_info"
    if score < COMPLETION_WELL_PLANNED_FROM:
        return "in_progress"
    return "well_planned"


_TIER_MESSAGES = {
    "needs_info": "We still need to gather more information to help you with your project.",
    "in_progress": "Good progress! Let's fill in the remaining details.",
    "well_planned": "Great! Your project information is nearly complete.",
}


def completion_message(project_name: str, score: int) -> str:
    """Human-readable completion summary for the assistant's reply."""
    return f'Project "{project_name}" is {score}% complete. {_TIER_MESSAGES[completion_tier(score)]}'
