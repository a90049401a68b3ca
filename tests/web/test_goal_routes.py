"""Tests for learning goal and trajectory routes."""

from datetime import datetime, timedelta, timezone


def _target(days: int) -> str:
    return (datetime.now(timezone.utc) + timedelta(days=days)).isoformat()


def test_list_empty(client, agent_id):
    res = client.get(f"/api/agents/{agent_id}/goals")
    assert res.status_code == 200
    assert res.json() == {"goals": []}


def test_create_goal(client, agent_id):
    res = client.post(
        f"/api/agents/{agent_id}/goals",
        json={"title": "Learn Spanish", "category": "topic_interest", "target_date": _target(30)},
    )
    assert res.status_code == 201
    data = res.json()
    assert data["title"] == "Learn Spanish"
    assert data["status"] == "active"
    assert data["agent_id"] == agent_id


def test_create_and_list(client, agent_id):
    client.post(f"/api/agents/{agent_id}/goals", json={"title": "Goal 1"})
    goals = client.get(f"/api/agents/{agent_id}/goals").json()["goals"]
    assert [g["title"] for g in goals] == ["Goal 1"]


def test_create_for_missing_agent(client):
    res = client.post("/api/agents/ghost/goals", json={"title": "Goal"})
    assert res.status_code == 404


def test_progress_validation(client, agent_id):
    goal_id = client.post(f"/api/agents/{agent_id}/goals", json={"title": "Goal"}).json()["id"]
    res = client.put(f"/api/agents/{agent_id}/goals/{goal_id}/progress", json={"progress_percentage": 150})
    assert res.status_code == 422


def test_progress_completes_goal(client, agent_id):
    goal_id = client.post(f"/api/agents/{agent_id}/goals", json={"title": "Goal"}).json()["id"]
    res = client.put(f"/api/agents/{agent_id}/goals/{goal_id}/progress", json={"progress_percentage": 100})
    assert res.status_code == 200
    data = res.json()
    assert data["status"] == "completed"
    assert data["achieved_at"] is not None


def test_progress_missing_goal(client, agent_id):
    res = client.put(f"/api/agents/{agent_id}/goals/nope/progress", json={"progress_percentage": 10})
    assert res.status_code == 404
    assert res.json()["detail"] == "Goal not found"


def test_trajectory(client, agent_id):
    goal_id = client.post(
        f"/api/agents/{agent_id}/goals",
        json={"title": "Learn Spanish", "progress_percentage": 40, "target_date": _target(30)},
    ).json()["id"]
    res = client.get(f"/api/agents/{agent_id}/goals/{goal_id}/trajectory")
    assert res.status_code == 200
    data = res.json()
    assert data["goal_id"] == goal_id
    assert data["current_progress"] == 0.4
    assert data["status"] in {"on_track", "at_risk", "behind", "ahead", "blocked"}


def test_trajectory_missing_goal(client, agent_id):
    res = client.get(f"/api/agents/{agent_id}/goals/nope/trajectory")
    assert res.status_code == 404
