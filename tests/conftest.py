"""Shared test fixtures for the home remodeling assistant test suite."""

import pytest


@pytest.fixture(autouse=True)
def set_test_environment(monkeypatch):
    """Ensure all tests run with ENVIRONMENT=test."""
    monkeypatch.setenv("ENVIRONMENT", "test")


@pytest.fixture(autouse=True)
def fresh_listing_cache():
    """Start every test with an empty listProjects cache."""
    from execution.project_tools import clear_listing_cache

    clear_listing_cache()
    yield
    clear_listing_cache()


@pytest.fixture
def tmp_output_dir(monkeypatch, tmp_path):
    """Redirect OUTPUT_DIR to a temporary directory for test isolation."""
    import config.settings as settings

    monkeypatch.setattr(settings, "OUTPUT_DIR", tmp_path)
    # Also patch it in modules that import OUTPUT_DIR at module level
    import execution.project_store as store

    monkeypatch.setattr(store, "OUTPUT_DIR", tmp_path)
    return tmp_path


@pytest.fixture
def user_id():
    return "user-123"


@pytest.fixture
def sample_project():
    """Return a project record in the stored shape."""
    return {
        "id": "0123456789abcdef0123456789abcdef",
        "user_id": "user-123",
        "name": "Kitchen Remodel",
        "description": "",
        "location": "Austin",
        "template_id": "tpl-kitchen",
        "status": "planning",
        "budget_min": None,
        "budget_max": None,
        "start_date": None,
        "target_completion_date": None,
        "project_details": [
            {
                "name": "Kitchen",
                "details": {
                    "paint": {"color": "blue"},
                    "flooring": {"material": "unknown"},
                },
            }
        ],
        "conversation_updates": [],
        "created_at": "2025-01-01T00:00:00+00:00",
        "updated_at": "2025-01-01T00:00:00+00:00",
    }


@pytest.fixture
def sample_areas():
    """Return a small area list for merge tests."""
    return [
        {
            "name": "Kitchen",
            "details": {
                "windows": {"count": 2, "type": "sliding"},
                "layout": "galley",
            },
        },
        {
            "name": "Bathroom",
            "details": {"type": "full"},
        },
    ]
