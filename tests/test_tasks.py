"""
Tests for task endpoints.
"""

from uuid import uuid4

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_list_tasks(client: AsyncClient, tenancy, auth_headers):
    response = await client.get(
        f"/api/projects/{tenancy['project'].id}/tasks",
        headers=auth_headers(tenancy["dave"]),
    )

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 1
    assert data["tasks"][0]["title"] == tenancy["task"].title


@pytest.mark.asyncio
async def test_non_member_cannot_list_tasks(client: AsyncClient, tenancy, auth_headers):
    response = await client.get(
        f"/api/projects/{tenancy['project'].id}/tasks",
        headers=auth_headers(tenancy["carol"]),
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_editor_creates_task(client: AsyncClient, tenancy, auth_headers):
    project = tenancy["project"]

    response = await client.post(
        f"/api/projects/{project.id}/tasks",
        json={"title": "Review copy", "status": "in_progress"},
        headers=auth_headers(tenancy["bob"]),
    )

    assert response.status_code == 201
    data = response.json()
    assert data["title"] == "Review copy"
    assert data["status"] == "in_progress"
    assert data["project_id"] == str(project.id)


@pytest.mark.asyncio
async def test_viewer_cannot_create_task(client: AsyncClient, tenancy, auth_headers):
    response = await client.post(
        f"/api/projects/{tenancy['project'].id}/tasks",
        json={"title": "Review copy"},
        headers=auth_headers(tenancy["dave"]),
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_create_task_in_missing_project(client: AsyncClient, tenancy, auth_headers):
    response = await client.post(
        f"/api/projects/{uuid4()}/tasks",
        json={"title": "Review copy"},
        headers=auth_headers(tenancy["alice"]),
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_get_task_with_permissions(client: AsyncClient, tenancy, auth_headers):
    task = tenancy["task"]

    response = await client.get(f"/api/tasks/{task.id}", headers=auth_headers(tenancy["alice"]))

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == str(task.id)
    assert data["status"] == "todo"
    assert data["permissions"] == ["view", "create", "update", "delete"]


@pytest.mark.asyncio
async def test_non_member_cannot_view_task(client: AsyncClient, tenancy, auth_headers):
    response = await client.get(
        f"/api/tasks/{tenancy['task'].id}",
        headers=auth_headers(tenancy["carol"]),
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_missing_task_is_not_found(client: AsyncClient, tenancy, auth_headers):
    response = await client.get(f"/api/tasks/{uuid4()}", headers=auth_headers(tenancy["alice"]))

    assert response.status_code == 404
    assert response.json()["detail"] == "Task not found"


@pytest.mark.asyncio
async def test_update_task(client: AsyncClient, tenancy, auth_headers):
    task = tenancy["task"]

    denied = await client.patch(
        f"/api/tasks/{task.id}",
        json={"status": "done"},
        headers=auth_headers(tenancy["dave"]),
    )
    allowed = await client.patch(
        f"/api/tasks/{task.id}",
        json={"status": "done"},
        headers=auth_headers(tenancy["bob"]),
    )

    assert denied.status_code == 403
    assert allowed.status_code == 200
    assert allowed.json()["status"] == "done"


@pytest.mark.asyncio
async def test_only_owner_deletes_task(client: AsyncClient, tenancy, auth_headers):
    task = tenancy["task"]

    response = await client.delete(f"/api/tasks/{task.id}", headers=auth_headers(tenancy["bob"]))
    assert response.status_code == 403

    response = await client.delete(f"/api/tasks/{task.id}", headers=auth_headers(tenancy["alice"]))
    assert response.status_code == 204

    response = await client.get(f"/api/tasks/{task.id}", headers=auth_headers(tenancy["alice"]))
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_task_of_other_company_is_forbidden(client: AsyncClient, tenancy, factory, auth_headers):
    other_owner = await factory.user("Erin")
    other_company = await factory.company(other_owner, name="C2")
    other_task = await factory.task(await factory.project(other_company))

    response = await client.get(f"/api/tasks/{other_task.id}", headers=auth_headers(tenancy["alice"]))

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_update_task_rejects_null_fields(client: AsyncClient, tenancy, auth_headers):
    task = tenancy["task"]

    for body in ({"status": None}, {"title": None}):
        response = await client.patch(
            f"/api/tasks/{task.id}",
            json=body,
            headers=auth_headers(tenancy["bob"]),
        )
        assert response.status_code == 422

    response = await client.get(f"/api/tasks/{task.id}", headers=auth_headers(tenancy["bob"]))
    assert response.json()["status"] == "todo"


@pytest.mark.asyncio
async def test_malformed_task_ids_are_bad_request(client: AsyncClient, tenancy, auth_headers):
    headers = auth_headers(tenancy["alice"])

    get = await client.get("/api/tasks/not-a-uuid", headers=headers)
    listing = await client.get("/api/projects/not-a-uuid/tasks", headers=headers)

    assert get.status_code == 400
    assert "task_id" in get.json()["detail"]
    assert listing.status_code == 400
