"""Tests for the httpx API client, run against the app in-process."""

import pytest
from fastapi.testclient import TestClient

from taskboard.client import ApiError, Credentials, TaskboardClient


@pytest.fixture
def api(client: TestClient) -> TaskboardClient:
    # TestClient is an httpx.Client, so the app is served in-process
    return TaskboardClient(client)


@pytest.fixture
def creds(api: TaskboardClient) -> Credentials:
    auth = api.register("carol", "carol@taskboard.io", "Secret123")
    return Credentials(auth["token"])


def test_login_and_users(api: TaskboardClient, creds: Credentials) -> None:
    auth = api.login("carol@taskboard.io", "Secret123")
    assert auth["user"]["username"] == "carol"
    assert [user["username"] for user in api.list_users(Credentials(auth["token"]))] == ["carol"]

    with pytest.raises(ApiError) as exc_info:
        api.login("carol@taskboard.io", "Wrong1234")
    assert exc_info.value.status_code == 401
    assert exc_info.value.message == "Invalid email or password"


def test_task_lifecycle(api: TaskboardClient, creds: Credentials) -> None:
    task = api.create_task(creds, {"title": "Ship release", "assignedUser": "carol"})
    assert task["status"] == "todo"

    assert api.get_task(creds, task["id"]) == task
    assert api.update_task(creds, task["id"], {"priority": "HIGH"})["priority"] == "HIGH"
    assert api.change_status(creds, task["id"], "done")["status"] == "done"

    page = api.list_tasks(creds, status="done", limit=5, search=None)
    assert [item["id"] for item in page["tasks"]] == [task["id"]]
    assert page["pagination"]["limit"] == 5

    assert api.get_stats(creds) == {"total": 1, "overdue": 0, "byStatus": {"done": 1}}

    api.delete_task(creds, task["id"])
    with pytest.raises(ApiError) as exc_info:
        api.get_task(creds, task["id"])
    assert exc_info.value.status_code == 404


def test_errors_carry_field_list(api: TaskboardClient, creds: Credentials) -> None:
    with pytest.raises(ApiError) as exc_info:
        api.create_task(creds, {"title": "No assignee"})
    assert exc_info.value.status_code == 400
    assert exc_info.value.errors == [{"field": "assignedUser", "message": "Field required"}]

    with pytest.raises(ApiError) as exc_info:
        api.list_tasks(Credentials("bogus"))
    assert exc_info.value.status_code == 401
