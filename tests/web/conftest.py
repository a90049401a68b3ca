"""Shared fixtures for web API tests."""

import pytest
from fastapi.testclient import TestClient

from cli.config_models import AppConfig, PathsConfig
from web.deps import get_config, get_pipeline


@pytest.fixture
def web_config(tmp_path):
    return AppConfig(paths=PathsConfig(db_path=tmp_path / "agents.db", log_file=tmp_path / "agentprog.log"))


@pytest.fixture
def client(pipeline, web_config):
    """Test client wired to a per-test database."""
    from web.app import app

    app.dependency_overrides[get_pipeline] = lambda: pipeline
    app.dependency_overrides[get_config] = lambda: web_config
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def agent_id(client):
    res = client.post("/api/agents", json={"name": "Ada", "id": "ada"})
    assert res.status_code == 201
    return "ada"
