"""Client endpoints: validation, CRUD status codes, tenant isolation."""
import pytest
from httpx import AsyncClient

from conftest import ALICE, bearer


@pytest.mark.asyncio
async def test_create_client(client: AsyncClient):
    response = await client.post(
        "/api/clients",
        json={
            "name": "Jane Doe",
            "email": "jane@x.com",
            "clientType": "buyer",
            "propertyType": "condo",
        },
        headers=bearer(),
    )
    assert response.status_code == 201
    body = response.json()
    assert body["id"]
    assert body["status"] == "active"
    assert body["name"] == "Jane Doe"
    assert body["email"] == "jane@x.com"
    assert body["clientType"] == "buyer"
    assert body["propertyType"] == "condo"
    assert body["phone"] is None
    assert body["userId"] == ALICE.id
    assert body["createdAt"]


@pytest.mark.asyncio
async def test_create_client_missing_email(client: AsyncClient):
    response = await client.post(
        "/api/clients",
        json={"name": "Jane Doe", "clientType": "buyer", "propertyType": "condo"},
        headers=bearer(),
    )
    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Validation failed"
    assert any(err["path"] == ["email"] for err in body["errors"])


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "field, value",
    [
        ("clientType", "renter"),
        ("status", "archived"),
        ("email", "not-an-email"),
        ("name", "   "),
    ],
)
async def test_create_client_rejects_bad_values(client: AsyncClient, field, value):
    payload = {
        "name": "Jane Doe",
        "email": "jane@example.com",
        "clientType": "buyer",
        "propertyType": "condo",
        field: value,
    }
    response = await client.post("/api/clients", json=payload, headers=bearer())
    assert response.status_code == 400
    assert [err["path"] for err in response.json()["errors"]] == [[field]]


@pytest.mark.asyncio
async def test_owner_comes_from_token_not_payload(client: AsyncClient, new_client):
    created = await new_client(userId="someone-else", user_id="someone-else")
    assert created["userId"] == ALICE.id


@pytest.mark.asyncio
async def test_list_clients_newest_first(client: AsyncClient, new_client):
    first = await new_client(name="First")
    second = await new_client(name="Second")
    third = await new_client(name="Third")

    response = await client.get("/api/clients", headers=bearer())
    assert response.status_code == 200
    assert [c["id"] for c in response.json()] == [third["id"], second["id"], first["id"]]


@pytest.mark.asyncio
async def test_list_clients_status_filter(client: AsyncClient, new_client):
    await new_client(name="Open")
    closed = await new_client(name="Done", status="closed")

    response = await client.get("/api/clients", params={"status": "closed"}, headers=bearer())
    assert [c["id"] for c in response.json()] == [closed["id"]]

    response = await client.get("/api/clients", params={"status": "bogus"}, headers=bearer())
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_get_client(client: AsyncClient, new_client):
    created = await new_client()
    response = await client.get(f"/api/clients/{created['id']}", headers=bearer())
    assert response.status_code == 200
    assert response.json() == created


@pytest.mark.asyncio
async def test_update_client_partial(client: AsyncClient, new_client):
    created = await new_client(phone="555-0100")
    response = await client.put(
        f"/api/clients/{created['id']}",
        json={"status": "closed", "propertyType": "townhouse"},
        headers=bearer(),
    )
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "closed"
    assert body["propertyType"] == "townhouse"
    assert body["name"] == created["name"]
    assert body["phone"] == "555-0100"
    assert body["createdAt"] == created["createdAt"]


@pytest.mark.asyncio
async def test_update_client_can_clear_phone_but_not_name(client: AsyncClient, new_client):
    created = await new_client(phone="555-0100")

    response = await client.put(
        f"/api/clients/{created['id']}", json={"phone": None}, headers=bearer()
    )
    assert response.status_code == 200
    assert response.json()["phone"] is None

    response = await client.put(
        f"/api/clients/{created['id']}", json={"name": None}, headers=bearer()
    )
    assert response.status_code == 400
    assert response.json()["errors"][0]["path"] == ["name"]


@pytest.mark.asyncio
async def test_update_with_empty_body_returns_client(client: AsyncClient, new_client):
    created = await new_client()
    response = await client.put(f"/api/clients/{created['id']}", json={}, headers=bearer())
    assert response.status_code == 200
    assert response.json() == created


@pytest.mark.asyncio
async def test_update_missing_client(client: AsyncClient):
    response = await client.put(
        "/api/clients/does-not-exist", json={"status": "closed"}, headers=bearer()
    )
    assert response.status_code == 404
    assert response.json() == {"message": "Client not found"}


@pytest.mark.asyncio
async def test_delete_client(client: AsyncClient, new_client):
    created = await new_client()

    response = await client.delete(f"/api/clients/{created['id']}", headers=bearer())
    assert response.status_code == 204
    assert response.content == b""

    response = await client.delete(f"/api/clients/{created['id']}", headers=bearer())
    assert response.status_code == 404

    response = await client.get(f"/api/clients/{created['id']}", headers=bearer())
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_client_removes_its_requests_and_testimonials(
    client: AsyncClient, new_client
):
    owner = await new_client()
    request = await client.post(
        "/api/review-requests",
        json={"clientId": owner["id"], "message": "How did we do?"},
        headers=bearer(),
    )
    assert request.status_code == 201
    testimonial = await client.post(
        "/api/testimonials",
        json={
            "clientId": owner["id"],
            "requestId": request.json()["id"],
            "content": "Smooth closing",
            "rating": 5,
        },
        headers=bearer(),
    )
    assert testimonial.status_code == 201

    response = await client.delete(f"/api/clients/{owner['id']}", headers=bearer())
    assert response.status_code == 204

    assert (await client.get("/api/review-requests", headers=bearer())).json() == []
    assert (await client.get("/api/testimonials", headers=bearer())).json() == []
    stats = (await client.get("/api/dashboard/stats", headers=bearer())).json()
    assert stats["totalClients"] == 0
    assert stats["reviewsReceived"] == 0
    assert stats["pendingRequests"] == 0
    assert stats["avgRating"] == 0


@pytest.mark.asyncio
async def test_other_agent_cannot_see_or_touch_client(client: AsyncClient, new_client):
    created = await new_client()
    url = f"/api/clients/{created['id']}"
    bob = bearer("bob-token")

    assert (await client.get("/api/clients", headers=bob)).json() == []

    not_found = [
        await client.get(url, headers=bob),
        await client.put(url, json={"status": "closed"}, headers=bob),
        await client.delete(url, headers=bob),
    ]
    assert [r.status_code for r in not_found] == [404, 404, 404]
    # Same body as a client that never existed
    assert all(r.json() == {"message": "Client not found"} for r in not_found)

    response = await client.get(url, headers=bearer())
    assert response.json() == created
