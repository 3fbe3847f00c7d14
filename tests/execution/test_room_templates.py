"""Unit tests for execution/room_templates.py."""

from execution.completion import score_project
from execution.room_templates import (
    BASE_ROOM_TEMPLATE,
    find_template_by_category,
    get_room_details_template,
    get_template,
    group_templates,
    initial_rooms_for_template,
    load_templates,
)


class TestRoomDetailsTemplate:
    def test_kitchen_includes_base_and_specifics(self):
        details = get_room_details_template("kitchen")
        assert "windows" in details
        assert details["cabinets"]["style"] == "unknown"
        assert details["appliances"]["range"] == "unknown"

    def test_unknown_category_gets_base_only(self):
        assert get_room_details_template("outdoor", "Patio") == BASE_ROOM_TEMPLATE

    def test_room_name_picks_category_for_whole_house(self):
        details = get_room_details_template("whole_house", "Primary Bedroom")
        assert details["closet"] == {"type": "unknown", "organization": "unknown"}

    def test_category_spelling_is_normalized(self):
        assert "vanity" in get_room_details_template("Bathroom")
        assert "fireplace" in get_room_details_template("living-room")

    def test_returns_fresh_copies(self):
        first = get_room_details_template("kitchen")
        first["windows"]["count"] = 4
        assert get_room_details_template("kitchen")["windows"]["count"] is None
        assert BASE_ROOM_TEMPLATE["windows"]["count"] is None

    def test_seeded_room_scores_zero(self):
        project = {"project_details": [{"name": "Kitchen", "details": get_room_details_template("kitchen")}]}
        assert score_project(project) == 0


class TestTemplateCatalog:
    def test_templates_sorted_by_category(self):
        categories = [t["category"] for t in load_templates()]
        assert categories == sorted(categories)

    def test_every_template_has_rooms(self):
        for template in load_templates():
            assert template["id"].startswith("tpl-")
            assert template["default_rooms"]

    def test_get_template(self):
        assert get_template("tpl-kitchen")["category"] == "kitchen"
        assert get_template("tpl-missing") is None
        assert get_template(None) is None

    def test_find_by_category(self):
        assert find_template_by_category("bathroom")["id"] == "tpl-bathroom"
        assert find_template_by_category("Whole House")["id"] == "tpl-whole-house"
        assert find_template_by_category("garage") is None

    def test_loaded_templates_are_copies(self):
        load_templates()[0]["name"] = "changed"
        assert load_templates()[0]["name"] != "changed"

    def test_group_templates(self):
        grouped = group_templates(load_templates())
        assert set(grouped) == {"bathroom", "bedroom", "kitchen", "living_room", "outdoor", "whole_house"}
        assert grouped["kitchen"][0]["id"] == "tpl-kitchen"


class TestInitialRooms:
    def test_no_template(self):
        assert initial_rooms_for_template(None) == []

    def test_whole_house_rooms(self):
        rooms = initial_rooms_for_template(get_template("tpl-whole-house"))
        assert [r["name"] for r in rooms] == ["Kitchen", "Living Room", "Primary Bedroom", "Bathroom"]
        assert "cabinets" in rooms[0]["details"]
        assert "fireplace" in rooms[1]["details"]
        assert "closet" in rooms[2]["details"]
        assert "shower" in rooms[3]["details"]

    def test_category_override(self):
        template = {"id": "tpl-x", "category": "outdoor", "default_rooms": ["Den"]}
        rooms = initial_rooms_for_template(template, "living_room")
        assert "fireplace" in rooms[0]["details"]

    def test_malformed_rooms_ignored(self):
        template = {"id": "tpl-x", "category": "kitchen", "default_rooms": ["Kitchen", 7, None]}
        assert [r["name"] for r in initial_rooms_for_template(template)] == ["Kitchen"]
