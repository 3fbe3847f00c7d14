"""Project data validation checks.

Runs before any project data reaches the store or the merge/score logic.
Pure deterministic logic. Only the fields present in the data are checked,
so the same rules serve full records and partial updates.
"""

from config.settings import PROJECT_STATUSES


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def check_name(data: dict) -> list[str]:
    """A name, when supplied, must be a non-blank string."""
    if "name" not in data:
        return []
    name = data["name"]
    if not isinstance(name, str) or not name.strip():
        return ["Project name is required"]
    return []


def check_status(data: dict) -> list[str]:
    """A status, when supplied, must be one of PROJECT_STATUSES."""
    if data.get("status") is None:
        return []
    if data["status"] not in PROJECT_STATUSES:
        return ["Invalid project status"]
    return []


def check_budget(data: dict) -> list[str]:
    """Budget bounds must be non-negative numbers with min <= max.

    Args:
        data: Project data (full or partial).

    Returns:
        List of error strings, empty if the budget is valid.
    """
    errors = []
    budget_min = data.get("budget_min")
    budget_max = data.get("budget_max")

    for label, value in (("Minimum", budget_min), ("Maximum", budget_max)):
        if value is None:
            continue
        if not _is_number(value):
            errors.append(f"{label} budget must be a number")
        elif value < 0:
            errors.append(f"{label} budget cannot be negative")

    if (
        not errors
        and _is_number(budget_min)
        and _is_number(budget_max)
        and budget_min > budget_max
    ):
        errors.append("Minimum budget cannot exceed maximum budget")
    return errors


def check_project_details(data: dict) -> list[str]:
    """Areas must be a list of {'name': str, 'details': dict}."""
    if "project_details" not in data:
        return []
    areas = data["project_details"]
    if not isinstance(areas, list):
        return ["project_details must be a list of areas"]
    errors = []
    for i, area in enumerate(areas):
        if not isinstance(area, dict) or not isinstance(area.get("name"), str):
            errors.append(f"project_details[{i}] must have a string name")
        elif not isinstance(area.get("details", {}), dict):
            errors.append(f"project_details[{i}].details must be an object")
    return errors


def validate_project_data(data: dict) -> dict:
    """Run all checks over (possibly partial) project data.

    Args:
        data: Project fields to validate.

    Returns:
        Dict with 'valid' bool and 'errors' list.
    """
    errors = (
        check_name(data)
        + check_status(data)
        + check_budget(data)
        + check_project_details(data)
    )
    return {"valid": len(errors) == 0, "errors": errors}


def require_valid_project_data(data: dict) -> None:
    """Raise ValueError listing every problem if the data is invalid."""
    result = validate_project_data(data)
    if not result["valid"]:
        raise ValueError(f"Validation failed: {', '.join(result['errors'])}")
