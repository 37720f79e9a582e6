"""
Tests for company-scoped and project endpoints.
"""

from uuid import uuid4

import pytest
from httpx import AsyncClient

from tenantgate.main import app
from tenantgate.core.auth import AuthorizationEngine, TablePolicyEngine
from tenantgate.api.dependencies.authorization import get_authorization_engine


# ============ Listing ============


@pytest.mark.asyncio
async def test_members_list_projects_with_task_counts(client: AsyncClient, tenancy, auth_headers):
    company = tenancy["company"]

    for user in ("alice", "bob", "dave"):
        response = await client.get(
            f"/api/companies/{company.id}/projects",
            headers=auth_headers(tenancy[user]),
        )

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["projects"][0]["id"] == str(tenancy["project"].id)
        assert data["projects"][0]["task_count"] == 1


@pytest.mark.asyncio
async def test_non_member_listing_is_not_found(client: AsyncClient, tenancy, auth_headers):
    response = await client.get(
        f"/api/companies/{tenancy['company'].id}/projects",
        headers=auth_headers(tenancy["carol"]),
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_unknown_company_listing_is_not_found(client: AsyncClient, tenancy, auth_headers):
    response = await client.get(
        f"/api/companies/{uuid4()}/projects",
        headers=auth_headers(tenancy["alice"]),
    )

    assert response.status_code == 404


# ============ Create ============


@pytest.mark.asyncio
async def test_editor_creates_project(client: AsyncClient, tenancy, auth_headers):
    company = tenancy["company"]

    response = await client.post(
        f"/api/companies/{company.id}/projects",
        json={"name": "Launch", "description": "Q3 launch"},
        headers=auth_headers(tenancy["bob"]),
    )

    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Launch"
    assert data["company_id"] == str(company.id)


@pytest.mark.asyncio
async def test_viewer_cannot_create_project(client: AsyncClient, tenancy, auth_headers):
    response = await client.post(
        f"/api/companies/{tenancy['company'].id}/projects",
        json={"name": "Launch"},
        headers=auth_headers(tenancy["dave"]),
    )

    assert response.status_code == 403
    assert "requires OWNER or EDITOR" in response.json()["detail"]


@pytest.mark.asyncio
async def test_non_member_create_is_not_found(client: AsyncClient, tenancy, auth_headers):
    response = await client.post(
        f"/api/companies/{tenancy['company'].id}/projects",
        json={"name": "Launch"},
        headers=auth_headers(tenancy["carol"]),
    )

    assert response.status_code == 404


# ============ Single project ============


@pytest.mark.asyncio
async def test_get_project_includes_tasks_and_permissions(client: AsyncClient, tenancy, auth_headers):
    project = tenancy["project"]

    response = await client.get(f"/api/projects/{project.id}", headers=auth_headers(tenancy["bob"]))

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == project.name
    assert [t["id"] for t in data["tasks"]] == [str(tenancy["task"].id)]
    assert data["permissions"] == ["view", "create", "update"]

    company = data["company"]
    assert company["id"] == str(tenancy["company"].id)
    assert company["owner"] == {
        "id": str(tenancy["alice"].id),
        "name": "Alice",
        "email": tenancy["alice"].email,
    }
    members = {m["user"]["name"]: m["role"] for m in company["members"]}
    assert members == {"Bob": "EDITOR", "Dave": "VIEWER"}
    assert all(m["user"]["email"] for m in company["members"])


@pytest.mark.asyncio
async def test_viewer_permissions(client: AsyncClient, tenancy, auth_headers):
    response = await client.get(
        f"/api/projects/{tenancy['project'].id}",
        headers=auth_headers(tenancy["dave"]),
    )

    assert response.status_code == 200
    assert response.json()["permissions"] == ["view"]


@pytest.mark.asyncio
async def test_non_member_is_forbidden(client: AsyncClient, tenancy, auth_headers):
    response = await client.get(
        f"/api/projects/{tenancy['project'].id}",
        headers=auth_headers(tenancy["carol"]),
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_missing_project_is_not_found(client: AsyncClient, tenancy, auth_headers):
    response = await client.get(f"/api/projects/{uuid4()}", headers=auth_headers(tenancy["alice"]))

    assert response.status_code == 404
    assert response.json()["detail"] == "Project not found"


@pytest.mark.asyncio
async def test_editor_updates_project(client: AsyncClient, tenancy, auth_headers):
    response = await client.patch(
        f"/api/projects/{tenancy['project'].id}",
        json={"name": "Renamed"},
        headers=auth_headers(tenancy["bob"]),
    )

    assert response.status_code == 200
    assert response.json()["name"] == "Renamed"


@pytest.mark.asyncio
async def test_viewer_cannot_update_project(client: AsyncClient, tenancy, auth_headers):
    response = await client.patch(
        f"/api/projects/{tenancy['project'].id}",
        json={"name": "Renamed"},
        headers=auth_headers(tenancy["dave"]),
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_only_owner_deletes_project(client: AsyncClient, tenancy, auth_headers):
    project = tenancy["project"]

    response = await client.delete(f"/api/projects/{project.id}", headers=auth_headers(tenancy["bob"]))
    assert response.status_code == 403
    assert response.json()["detail"] == "Not authorized: requires OWNER"

    response = await client.delete(f"/api/projects/{project.id}", headers=auth_headers(tenancy["alice"]))
    assert response.status_code == 204

    response = await client.get(f"/api/projects/{project.id}", headers=auth_headers(tenancy["alice"]))
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_owner_with_viewer_row_can_delete(client: AsyncClient, factory, auth_headers):
    owner = await factory.user("Owner")
    company = await factory.company(owner)
    await factory.member(company, owner)
    project = await factory.project(company)

    response = await client.delete(f"/api/projects/{project.id}", headers=auth_headers(owner))

    assert response.status_code == 204


# ============ Authentication and availability ============


@pytest.mark.asyncio
async def test_requires_authentication(client: AsyncClient, tenancy):
    response = await client.get(f"/api/projects/{tenancy['project'].id}")

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_rejects_invalid_token(client: AsyncClient, tenancy):
    response = await client.get(
        f"/api/projects/{tenancy['project'].id}",
        headers={"Authorization": "Bearer not-a-jwt"},
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_rejects_unknown_subject(client: AsyncClient, tenancy, token_for):
    response = await client.get(
        f"/api/projects/{tenancy['project'].id}",
        headers={"Authorization": f"Bearer {token_for(uuid4())}"},
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_rejects_inactive_user(client: AsyncClient, tenancy, factory, auth_headers):
    ghost = await factory.user("Ghost", is_active=False)

    response = await client.get(f"/api/projects/{tenancy['project'].id}", headers=auth_headers(ghost))

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_store_outage_is_service_unavailable(
    client: AsyncClient, tenancy, auth_headers, unavailable_store
):
    app.dependency_overrides[get_authorization_engine] = lambda: AuthorizationEngine(
        store=unavailable_store,
        policy_engine=TablePolicyEngine(),
    )

    response = await client.get(
        f"/api/projects/{tenancy['project'].id}",
        headers=auth_headers(tenancy["alice"]),
    )

    assert response.status_code == 503


@pytest.mark.asyncio
async def test_request_id_is_echoed(client: AsyncClient):
    response = await client.get("/health", headers={"X-Request-ID": "req-123"})

    assert response.status_code == 200
    assert response.headers["X-Request-ID"] == "req-123"
    assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_update_project_rejects_null_name(client: AsyncClient, tenancy, auth_headers):
    project = tenancy["project"]

    response = await client.patch(
        f"/api/projects/{project.id}",
        json={"name": None},
        headers=auth_headers(tenancy["bob"]),
    )
    assert response.status_code == 422

    response = await client.patch(
        f"/api/projects/{project.id}",
        json={"description": None},
        headers=auth_headers(tenancy["bob"]),
    )
    assert response.status_code == 200
    assert response.json()["name"] == project.name
    assert response.json()["description"] is None


# ============ Malformed ids ============


@pytest.mark.asyncio
async def test_malformed_project_id_is_bad_request(client: AsyncClient, tenancy, auth_headers):
    response = await client.get("/api/projects/not-a-uuid", headers=auth_headers(tenancy["alice"]))

    assert response.status_code == 400
    assert "project_id" in response.json()["detail"]


@pytest.mark.asyncio
async def test_malformed_company_id_is_bad_request(client: AsyncClient, tenancy, auth_headers):
    listing = await client.get("/api/companies/xyz/projects", headers=auth_headers(tenancy["alice"]))
    create = await client.post(
        "/api/companies/xyz/projects",
        json={"name": "Launch"},
        headers=auth_headers(tenancy["alice"]),
    )

    assert listing.status_code == 400
    assert "company_id" in listing.json()["detail"]
    assert create.status_code == 400
