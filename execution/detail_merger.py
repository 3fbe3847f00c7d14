"""Name-keyed upsert of area detail patches.

Each patch names an area and carries a partial detail document. A patch for
an existing area is shallow-merged into that area's details: top-level keys
in the patch overwrite, everything else is kept. A nested sub-document in
the patch replaces the stored one whole. A patch for an unseen area appends
a new area at the end.

The caller's list and patch dicts are never mutated or aliased.
"""

import copy
from typing import Iterable, Mapping


def merge_areas(
    existing_areas: Iterable[Mapping],
    patches: Iterable[tuple[str, Mapping]],
) -> list[dict]:
    """Apply area patches in order and return the updated area list.

    Args:
        existing_areas: Current areas, each {'name': str, 'details': dict}.
        patches: Ordered (area_name, partial_details) pairs.

    Returns:
        A new list of areas. Existing areas keep their position; areas
        introduced by patches follow in patch order.
    """
    areas = [copy.deepcopy(dict(area)) for area in existing_areas]
    index_by_name = {}
    for i, area in enumerate(areas):
        index_by_name.setdefault(area.get("name"), i)

    for area_name, partial in patches:
        partial = copy.deepcopy(dict(partial))
        i = index_by_name.get(area_name)
        if i is None:
            index_by_name[area_name] = len(areas)
            areas.append({"name": area_name, "details": partial})
            continue
        old_details = areas[i].get("details")
        if not isinstance(old_details, Mapping):
            old_details = {}
        areas[i] = {**areas[i], "details": {**old_details, **partial}}

    return areas


def patches_from_payload(payload) -> list[tuple[str, dict]]:
    """Normalize inbound patch shapes into (area_name, details) pairs.

    Accepts:
        - [{'areaName': ..., 'details': {...}}] from the chat tool
        - [{'name': ..., 'details': {...}}] from the PATCH endpoint
        - {'Kitchen': {...}, ...} from the PUT endpoint

    Args:
        payload: One of the shapes above, or None.

    Returns:
        List of (area_name, details) tuples in input order.

    Raises:
        ValueError: If an entry has no area name or its details are not a mapping.
    """
    if payload is None:
        return []
    if isinstance(payload, Mapping):
        items = list(payload.items())
    else:
        items = []
        for entry in payload:
            if not isinstance(entry, Mapping):
                raise ValueError(f"Invalid area update: {entry!r}")
            name = entry.get("areaName", entry.get("name"))
            items.append((name, entry.get("details", {})))

    patches = []
    for name, details in items:
        if not isinstance(name, str):
            raise ValueError(f"Area update is missing an area name: {name!r}")
        if details is None:
            details = {}
        if not isinstance(details, Mapping):
            raise ValueError(f"Details for area '{name}' must be an object")
        patches.append((name, dict(details)))
    return patches
