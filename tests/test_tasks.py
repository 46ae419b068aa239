import pytest
from httpx import ASGITransport, AsyncClient

from taskboard.config import settings
from taskboard.services import tasks as task_service
from tests.helpers import API


async def create(client, headers, project_id, **fields):
    payload = {"title": "Write copy", "description": "Landing page text"}
    payload.update(fields)
    return await client.post(f"{API}/projects/{project_id}/tasks", json=payload, headers=headers)


async def test_status_defaults_to_todo(client, alice, project_id):
    response = await create(client, alice["headers"], project_id)
    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "Todo"
    assert body["project_id"] == project_id
    assert body["assignee"] is None
    assert body["due_date"] is None


@pytest.mark.parametrize("status", ["Todo", "In Progress", "Done"])
async def test_given_status_is_kept(client, alice, project_id, status):
    response = await create(client, alice["headers"], project_id, status=status)
    assert response.json()["status"] == status


async def test_create_accepts_assignee_and_camel_case_due_date(client, alice, project_id):
    response = await create(client, alice["headers"], project_id, assignee=alice["id"], dueDate="2026-12-31")
    body = response.json()
    assert body["assignee"] == alice["id"]
    assert body["due_date"] == "2026-12-31"


async def test_blank_optional_fields_are_dropped(client, alice, project_id):
    response = await create(client, alice["headers"], project_id, assignee="", dueDate="")
    assert response.status_code == 201
    assert response.json()["assignee"] is None
    assert response.json()["due_date"] is None


async def test_create_requires_title_and_description(client, alice, project_id):
    response = await client.post(
        f"{API}/projects/{project_id}/tasks", json={"title": "Only title"}, headers=alice["headers"]
    )
    assert response.status_code == 400
    assert "description" in response.json()["message"]


async def test_markup_only_title_counts_as_missing(client, alice, project_id):
    response = await create(client, alice["headers"], project_id, title="<b> </b>")
    assert response.status_code == 400


async def test_title_is_sanitized(client, alice, project_id):
    response = await create(client, alice["headers"], project_id, title="  <i>Ship</i> it ")
    assert response.json()["title"] == "Ship it"


async def test_unknown_status_is_400(client, alice, project_id):
    response = await create(client, alice["headers"], project_id, status="Blocked")
    assert response.status_code == 400


async def test_list_returns_project_tasks_in_creation_order(client, alice, project_id):
    other = await client.post(
        f"{API}/projects", json={"name": "Other", "description": "x"}, headers=alice["headers"]
    )
    for title in ("one", "two", "three"):
        await create(client, alice["headers"], project_id, title=title)
    await create(client, alice["headers"], other.json()["id"], title="elsewhere")

    response = await client.get(f"{API}/projects/{project_id}/tasks", headers=alice["headers"])
    assert response.status_code == 200
    assert [t["title"] for t in response.json()] == ["one", "two", "three"]


async def test_list_for_unknown_project_is_empty(client, alice):
    response = await client.get(f"{API}/projects/nothing-here/tasks", headers=alice["headers"])
    assert response.status_code == 200
    assert response.json() == []


async def test_status_only_update_changes_only_status(client, alice, project_id):
    created = (await create(client, alice["headers"], project_id, dueDate="2026-05-01")).json()

    response = await client.put(f"{API}/tasks/{created['id']}", json={"status": "Done"}, headers=alice["headers"])
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "Done"
    assert body["title"] == created["title"]
    assert body["description"] == created["description"]
    assert body["due_date"] == "2026-05-01"


async def test_full_update(client, alice, bob, project_id):
    created = (await create(client, alice["headers"], project_id)).json()
    response = await client.put(
        f"{API}/tasks/{created['id']}",
        json={
            "title": "Rewrite copy",
            "description": "Shorter",
            "status": "In Progress",
            "assignee": bob["id"],
            "dueDate": "2027-01-15",
        },
        headers=alice["headers"],
    )
    body = response.json()
    assert body["title"] == "Rewrite copy"
    assert body["status"] == "In Progress"
    assert body["assignee"] == bob["id"]
    assert body["due_date"] == "2027-01-15"


async def test_update_can_clear_assignee(client, alice, project_id):
    created = (await create(client, alice["headers"], project_id, assignee=alice["id"])).json()
    response = await client.put(f"{API}/tasks/{created['id']}", json={"assignee": None}, headers=alice["headers"])
    assert response.json()["assignee"] is None


async def test_null_required_field_in_update_is_ignored(client, alice, project_id):
    created = (await create(client, alice["headers"], project_id)).json()
    response = await client.put(
        f"{API}/tasks/{created['id']}", json={"title": None, "status": None}, headers=alice["headers"]
    )
    assert response.status_code == 200
    assert response.json()["title"] == created["title"]
    assert response.json()["status"] == "Todo"


async def test_update_unknown_task_is_404(client, alice):
    response = await client.put(f"{API}/tasks/missing", json={"status": "Done"}, headers=alice["headers"])
    assert response.status_code == 404
    assert response.json() == {"message": "Task not found"}


async def test_delete_task(client, alice, project_id):
    created = (await create(client, alice["headers"], project_id)).json()

    response = await client.delete(f"{API}/tasks/{created['id']}", headers=alice["headers"])
    assert response.status_code == 200
    assert response.json() == {"message": "Task removed"}

    again = await client.delete(f"{API}/tasks/{created['id']}", headers=alice["headers"])
    assert again.status_code == 404


async def test_task_routes_require_token(client, project_id):
    assert (await client.get(f"{API}/projects/{project_id}/tasks")).status_code == 401
    assert (await client.put(f"{API}/tasks/x", json={"status": "Done"})).status_code == 401
    assert (await client.delete(f"{API}/tasks/x")).status_code == 401


async def test_users_list_excludes_password_hash(client, alice, bob):
    response = await client.get(f"{API}/users", headers=alice["headers"])
    assert response.status_code == 200
    users = response.json()
    assert {u["email"] for u in users} == {"alice@example.com", "bob@example.com"}
    for u in users:
        assert set(u) == {"id", "name", "email", "avatar"}


async def test_unexpected_failure_is_500_and_logged(api_app, monkeypatch, tmp_path, alice, project_id):
    log_path = tmp_path / "error.log"
    monkeypatch.setattr(settings, "ERROR_LOG_PATH", str(log_path))

    async def broken(db, project_id):
        raise RuntimeError("store unavailable")

    monkeypatch.setattr(task_service, "list_tasks_for_project", broken)

    transport = ASGITransport(app=api_app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        response = await ac.get(f"{API}/projects/{project_id}/tasks", headers=alice["headers"])

    assert response.status_code == 500
    assert response.json() == {"message": "Server error"}
    assert "store unavailable" in log_path.read_text()


async def test_health_endpoints(client):
    assert (await client.get("/")).json() == {"message": "Taskboard API running"}
    health = await client.get("/health")
    assert health.status_code == 200
    assert health.text == "OK"
