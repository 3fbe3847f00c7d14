"""Test fixtures for the web layer."""

import pytest
from fastapi.testclient import TestClient

from app.main import app

AUTH = {"X-User-Id": "user-123"}


@pytest.fixture
def client(tmp_output_dir):
    """Create a TestClient with output directed to temp directory."""
    return TestClient(app, headers=AUTH)


@pytest.fixture
def anonymous_client(tmp_output_dir):
    return TestClient(app)


@pytest.fixture
def created_project(client):
    """Create a kitchen project and return its JSON body."""
    response = client.post(
        "/api/projects",
        json={"name": "Test Kitchen", "template_id": "tpl-kitchen", "location": "Austin"},
    )
    assert response.status_code == 200
    return response.json()
