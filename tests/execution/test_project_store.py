"""Unit tests for execution/project_store.py."""

import json
from datetime import date

import pytest

from execution.project_store import (
    apply_area_patches,
    create_project,
    delete_project,
    has_any_project,
    list_projects,
    load_project,
    patch_project_details,
    record_conversation_update,
    save_project,
    update_project,
)


@pytest.fixture
def project(tmp_output_dir, user_id):
    return create_project(
        user_id,
        "  Kitchen Remodel  ",
        location="Austin",
        project_details=[{"name": "Kitchen", "details": {"layout": "unknown"}}],
    )


class TestCreateProject:
    def test_creates_file_with_defaults(self, project, tmp_output_dir, user_id):
        path = tmp_output_dir / "projects" / f"{project['id']}.json"
        assert path.exists()
        stored = json.loads(path.read_text(encoding="utf-8"))
        assert stored["name"] == "Kitchen Remodel"
        assert stored["user_id"] == user_id
        assert stored["status"] == "planning"
        assert stored["description"] is None
        assert stored["conversation_updates"] == []
        assert stored["project_details"] == [{"name": "Kitchen", "details": {"layout": "unknown"}}]

    def test_id_is_hex(self, project):
        assert len(project["id"]) == 32
        int(project["id"], 16)

    def test_blank_name_rejected(self, tmp_output_dir, user_id):
        with pytest.raises(ValueError, match="Project name is required"):
            create_project(user_id, "   ")

    def test_negative_budget_rejected(self, tmp_output_dir, user_id):
        with pytest.raises(ValueError, match="negative"):
            create_project(user_id, "Deck", budget_min=-10)

    def test_nothing_written_on_validation_failure(self, tmp_output_dir, user_id):
        with pytest.raises(ValueError):
            create_project(user_id, "Deck", status="bogus")
        assert list_projects(user_id) == []


class TestLoadProject:
    def test_roundtrip(self, project, user_id):
        assert load_project(project["id"], user_id) == project

    def test_other_user_cannot_load(self, project):
        with pytest.raises(FileNotFoundError):
            load_project(project["id"], "someone-else")

    def test_missing_project(self, tmp_output_dir, user_id):
        with pytest.raises(FileNotFoundError):
            load_project("f" * 32, user_id)

    def test_malformed_id_is_not_found(self, tmp_output_dir, user_id):
        with pytest.raises(FileNotFoundError):
            load_project("../../etc/passwd", user_id)


class TestSaveProject:
    def test_updates_timestamp(self, project, user_id):
        project["updated_at"] = "2000-01-01T00:00:00+00:00"
        save_project(project)
        assert load_project(project["id"], user_id)["updated_at"] != "2000-01-01T00:00:00+00:00"

    def test_rejects_schema_violation(self, project):
        project["status"] = "demolished"
        with pytest.raises(ValueError, match="Invalid project record"):
            save_project(project)

    def test_no_temp_files_left_behind(self, project, tmp_output_dir):
        save_project(project)
        leftovers = list((tmp_output_dir / "projects").glob("*.tmp"))
        assert leftovers == []


class TestListProjects:
    def test_only_own_projects(self, tmp_output_dir, user_id):
        create_project(user_id, "Mine")
        create_project("other-user", "Theirs")
        names = [p["name"] for p in list_projects(user_id)]
        assert names == ["Mine"]

    def test_ordering(self, tmp_output_dir, user_id):
        first = create_project(user_id, "First")
        second = create_project(user_id, "Second")
        first["created_at"] = "2020-01-01T00:00:00+00:00"
        second["created_at"] = "2021-01-01T00:00:00+00:00"
        save_project(first)
        save_project(second)
        assert [p["name"] for p in list_projects(user_id)] == ["First", "Second"]
        assert [p["name"] for p in list_projects(user_id, descending=True)] == ["Second", "First"]

    def test_skips_unreadable_files(self, project, tmp_output_dir, user_id):
        (tmp_output_dir / "projects" / ("a" * 32 + ".json")).write_text("{not json", encoding="utf-8")
        assert [p["id"] for p in list_projects(user_id)] == [project["id"]]

    def test_empty_store(self, tmp_output_dir, user_id):
        assert list_projects(user_id) == []
        assert has_any_project(user_id) is False

    def test_has_any_project(self, project, user_id):
        assert has_any_project(user_id) is True


class TestUpdateProject:
    def test_overwrites_given_fields(self, project, user_id):
        updated = update_project(project["id"], user_id, {"status": "in_progress", "budget_max": 40000})
        assert updated["status"] == "in_progress"
        assert updated["budget_max"] == 40000
        assert updated["location"] == "Austin"

    def test_replaces_project_details_wholesale(self, project, user_id):
        updated = update_project(project["id"], user_id, {"project_details": []})
        assert updated["project_details"] == []

    def test_ignores_unknown_and_protected_fields(self, project, user_id):
        updated = update_project(project["id"], user_id, {"user_id": "thief", "color": "red"})
        assert updated["user_id"] == user_id
        assert "color" not in updated

    def test_strips_name(self, project, user_id):
        assert update_project(project["id"], user_id, {"name": " Galley Kitchen "})["name"] == "Galley Kitchen"

    def test_invalid_update_raises(self, project, user_id):
        with pytest.raises(ValueError, match="Minimum budget cannot exceed maximum budget"):
            update_project(project["id"], user_id, {"budget_min": 10, "budget_max": 5})

    def test_missing_project(self, tmp_output_dir, user_id):
        with pytest.raises(FileNotFoundError):
            update_project("f" * 32, user_id, {"status": "on_hold"})

    def test_max_below_stored_min_rejected(self, tmp_output_dir, user_id):
        project = create_project(user_id, "Deck", budget_min=100, budget_max=200)
        with pytest.raises(ValueError, match="Minimum budget cannot exceed maximum budget"):
            update_project(project["id"], user_id, {"budget_max": 10})
        stored = load_project(project["id"], user_id)
        assert (stored["budget_min"], stored["budget_max"]) == (100, 200)

    def test_min_above_stored_max_rejected(self, tmp_output_dir, user_id):
        project = create_project(user_id, "Deck", budget_min=100, budget_max=200)
        with pytest.raises(ValueError, match="Minimum budget cannot exceed maximum budget"):
            update_project(project["id"], user_id, {"budget_min": 500})
        assert load_project(project["id"], user_id)["budget_min"] == 100

    def test_single_bound_within_stored_range(self, tmp_output_dir, user_id):
        project = create_project(user_id, "Deck", budget_min=100, budget_max=200)
        assert update_project(project["id"], user_id, {"budget_max": 150})["budget_max"] == 150


class TestAreaPatches:
    def test_apply_area_patches(self, sample_project):
        apply_area_patches(sample_project, [("Kitchen", {"layout": "island"}), ("Pantry", {"shelves": 4})])
        names = [a["name"] for a in sample_project["project_details"]]
        assert names == ["Kitchen", "Pantry"]
        assert sample_project["project_details"][0]["details"]["paint"] == {"color": "blue"}
        assert sample_project["project_details"][0]["details"]["layout"] == "island"

    def test_apply_to_missing_details(self):
        project = {"project_details": None}
        apply_area_patches(project, [("Den", {"a": 1})])
        assert project["project_details"] == [{"name": "Den", "details": {"a": 1}}]

    def test_patch_project_details_persists(self, project, user_id):
        patch_project_details(
            project["id"],
            user_id,
            [("Kitchen", {"layout": "U-shaped"}), ("Dining Room", {"table": "oak"})],
            {"description": "Open up the wall", "id": "ignored"},
        )
        stored = load_project(project["id"], user_id)
        assert stored["id"] == project["id"]
        assert stored["description"] == "Open up the wall"
        assert stored["project_details"] == [
            {"name": "Kitchen", "details": {"layout": "U-shaped"}},
            {"name": "Dining Room", "details": {"table": "oak"}},
        ]

    def test_patch_project_details_ignores_project_details_field(self, project, user_id):
        patch_project_details(project["id"], user_id, [], {"project_details": []})
        assert len(load_project(project["id"], user_id)["project_details"]) == 1

    def test_patch_project_details_validates_fields(self, project, user_id):
        with pytest.raises(ValueError):
            patch_project_details(project["id"], user_id, [], {"status": "bogus"})

    def test_patch_project_details_checks_merged_budget(self, tmp_output_dir, user_id):
        project = create_project(user_id, "Deck", budget_min=100, budget_max=200)
        with pytest.raises(ValueError, match="Minimum budget cannot exceed maximum budget"):
            patch_project_details(project["id"], user_id, [("Deck", {"boards": "cedar"})], {"budget_max": 10})
        stored = load_project(project["id"], user_id)
        assert stored["budget_max"] == 200
        assert stored["project_details"] == []

    def test_save_rejects_inverted_budget(self, project):
        project["budget_min"] = 300
        project["budget_max"] = 20
        with pytest.raises(ValueError, match="Minimum budget cannot exceed maximum budget"):
            save_project(project)


class TestConversationUpdates:
    def test_appends_dated_bullet(self, sample_project):
        record_conversation_update(sample_project, "Chose quartz countertops", today=date(2025, 3, 14))
        assert sample_project["conversation_updates"] == ["• Chose quartz countertops (2025-03-14)"]

    def test_keeps_existing_notes(self, sample_project):
        sample_project["conversation_updates"] = ["• Earlier (2025-01-01)"]
        record_conversation_update(sample_project, "Later", today=date(2025, 1, 2))
        assert sample_project["conversation_updates"] == ["• Earlier (2025-01-01)", "• Later (2025-01-02)"]

    def test_defaults_to_today(self, sample_project):
        record_conversation_update(sample_project, "Note")
        assert sample_project["conversation_updates"][0].startswith("• Note (")


class TestDeleteProject:
    def test_delete_existing(self, project, user_id):
        assert delete_project(project["id"], user_id) is True
        with pytest.raises(FileNotFoundError):
            load_project(project["id"], user_id)

    def test_delete_missing(self, tmp_output_dir, user_id):
        assert delete_project("f" * 32, user_id) is False

    def test_cannot_delete_other_users_project(self, project, user_id):
        assert delete_project(project["id"], "someone-else") is False
        assert load_project(project["id"], user_id)["id"] == project["id"]
