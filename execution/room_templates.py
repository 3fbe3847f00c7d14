"""Project template catalog and room detail templates.

Templates describe a remodeling category (kitchen, bathroom, ...) and the
rooms a new project of that category starts with. Each seeded room gets a
detail document pre-filled with "unknown" sentinels so the completion score
reflects what still has to be asked.
"""

import copy
import json
from functools import lru_cache

from config.settings import PROJECT_TEMPLATES_FILE, UNKNOWN_VALUE

U = UNKNOWN_VALUE

BASE_ROOM_TEMPLATE = {
    "size": {"square_feet": None},
    "windows": {"count": None, "type": U, "treatment": U},
    "doors": {"count": None, "type": U},
    "electrical": {"outlets_adequate": U, "needs_upgrade": U},
    "paint": {"color": "", "finish": U},
}

CATEGORY_ROOM_TEMPLATES = {
    "kitchen": {
        "layout": U,
        "cabinets": {"style": U, "material": U, "finish": U},
        "countertops": {"material": U},
        "appliances": {
            "range": U,
            "refrigerator": U,
            "dishwasher": U,
            "microwave": U,
        },
        "flooring": {"material": U},
        "lighting": {"recessed": U, "pendant": U, "undercabinet": U},
        "backsplash": {"material": U, "pattern": U},
        "plumbing": {"sink_style": U, "faucet_style": U},
    },
    "bathroom": {
        "type": U,
        "vanity": {"style": U, "material": U, "countertop": U},
        "shower": {"type": U, "door_type": U, "tile_material": U},
        "bathtub": {"type": U, "material": U},
        "toilet": {"type": U},
        "flooring": {"material": U},
        "lighting": {"vanity": U, "overhead": U, "shower": U},
    },
    "living_room": {
        "layout": U,
        "flooring": {"material": U},
        "lighting": {"overhead": U, "table_lamps": U, "floor_lamps": U},
        "fireplace": {"type": U, "surround": U},
        "builtins": {"entertainment_center": U, "bookshelves": U},
    },
    "bedroom": {
        "type": U,
        "flooring": {"material": U},
        "lighting": {"overhead": U, "bedside": U, "accent": U},
        "closet": {"type": U, "organization": U},
    },
}

# Room-name keywords used when the project category is not a room category
# (e.g. "whole_house" seeds a "Primary Bedroom").
_ROOM_NAME_KEYWORDS = [
    ("kitchen", "kitchen"),
    ("bath", "bathroom"),
    ("living", "living_room"),
    ("family", "living_room"),
    ("bedroom", "bedroom"),
]


def _normalize_category(category: str | None) -> str:
    return (category or "").strip().lower().replace(" ", "_").replace("-", "_")


def _category_for_room(category: str | None, room_name: str | None) -> str:
    normalized = _normalize_category(category)
    if normalized in CATEGORY_ROOM_TEMPLATES:
        return normalized
    lowered = (room_name or "").lower()
    for keyword, room_category in _ROOM_NAME_KEYWORDS:
        if keyword in lowered:
            return room_category
    return normalized


def get_room_details_template(category: str | None, room_name: str | None = None) -> dict:
    """Return a fresh detail document for a room.

    Args:
        category: Project category ('kitchen', 'bathroom', 'living_room',
            'bedroom', or anything else for the base template).
        room_name: Room name, consulted when the category alone does not
            identify a room type.

    Returns:
        A new dict; callers may mutate it freely.
    """
    details = copy.deepcopy(BASE_ROOM_TEMPLATE)
    specifics = CATEGORY_ROOM_TEMPLATES.get(_category_for_room(category, room_name), {})
    details.update(copy.deepcopy(specifics))
    return details


@lru_cache(maxsize=1)
def _load_catalog() -> tuple:
    with open(PROJECT_TEMPLATES_FILE, "r", encoding="utf-8") as f:
        return tuple(json.load(f))


def load_templates() -> list[dict]:
    """Return all project templates ordered by category."""
    templates = [copy.deepcopy(t) for t in _load_catalog()]
    return sorted(templates, key=lambda t: t["category"])


def get_template(template_id: str | None) -> dict | None:
    """Look up a template by id."""
    if not template_id:
        return None
    for template in load_templates():
        if template["id"] == template_id:
            return template
    return None


def find_template_by_category(category: str | None) -> dict | None:
    """Return the first template for a category, if any."""
    normalized = _normalize_category(category)
    for template in load_templates():
        if template["category"] == normalized:
            return template
    return None


def group_templates(templates: list[dict]) -> dict[str, list[dict]]:
    """Group templates by category, preserving input order."""
    grouped: dict[str, list[dict]] = {}
    for template in templates:
        grouped.setdefault(template["category"], []).append(template)
    return grouped


def initial_rooms_for_template(template: dict | None, category: str | None = None) -> list[dict]:
    """Build the starting area list for a new project.

    Args:
        template: The chosen template, or None.
        category: Category used for room details; defaults to the template's.

    Returns:
        List of {'name', 'details'} areas, empty when there is no template.
    """
    if not template:
        return []
    rooms = template.get("default_rooms")
    if not isinstance(rooms, list):
        return []
    category = category or template.get("category")
    return [
        {"name": room, "details": get_room_details_template(category, room)}
        for room in rooms
        if isinstance(room, str)
    ]
