"""
Tests for the HTTP adapter: shows, tickets and bookings endpoints.
"""

import asyncio
from decimal import Decimal

import pytest
from httpx import AsyncClient

from boxoffice.api.deps import get_ledger
from boxoffice.db.session import get_db
from boxoffice.main import app
from boxoffice.services.reservation_ledger import ReservationLedger


@pytest.mark.asyncio
async def test_issue_ticket(client: AsyncClient):
    first = await client.post("/api/v1/tickets/")
    second = await client.post("/api/v1/tickets/")

    assert first.status_code == 201
    assert first.json()["ticket_code"] == "A1"
    assert second.json()["ticket_code"] == "A2"

    lookup = await client.get(f"/api/v1/tickets/{first.json()['holder_id']}")
    assert lookup.status_code == 200
    assert lookup.json()["ticket_code"] == "A1"


@pytest.mark.asyncio
async def test_unknown_ticket(client: AsyncClient):
    response = await client.get("/api/v1/tickets/9999")
    assert response.status_code == 404
    assert response.json()["code"] == "HOLDER_NOT_FOUND"


@pytest.mark.asyncio
async def test_list_and_lookup_shows(client: AsyncClient, nova_show, big_show):
    response = await client.get("/api/v1/shows/")
    assert response.status_code == 200
    titles = [show["title"] for show in response.json()]
    assert titles == ["Avengers Endgame", "Nova"]

    lookup = await client.get("/api/v1/shows/lookup", params={"title": "Nova", "show_time": "3:00 PM"})
    assert lookup.status_code == 200
    assert lookup.json()["id"] == nova_show.id
    assert Decimal(lookup.json()["price"]) == 100

    missing = await client.get("/api/v1/shows/lookup", params={"title": "Nova", "show_time": "1:00 AM"})
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_get_show_not_found(client: AsyncClient):
    response = await client.get("/api/v1/shows/99999")
    assert response.status_code == 404
    assert response.json()["code"] == "SHOW_NOT_FOUND"


@pytest.mark.asyncio
async def test_book_seats(client: AsyncClient, nova_show, holder):
    response = await client.post(
        f"/api/v1/shows/{nova_show.id}/bookings",
        json={"holder_id": holder.id, "seats": [{"row": 0, "col": 0}, {"row": 0, "col": 1}]},
    )

    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "success"
    assert data["ticket_code"] == holder.ticket_code
    assert data["seats"] == ["A1", "A2"]
    assert Decimal(data["total"]) == 200

    seat_map = await client.get(f"/api/v1/shows/{nova_show.id}/seats")
    assert seat_map.status_code == 200
    reserved = {(s["row"], s["col"]) for s in seat_map.json()["reserved"]}
    assert reserved == {(0, 0), (0, 1)}
    assert seat_map.json()["available_count"] == 2


@pytest.mark.asyncio
async def test_book_taken_seat_returns_409(client: AsyncClient, nova_show, holder, other_holder):
    await client.post(
        f"/api/v1/shows/{nova_show.id}/bookings",
        json={"holder_id": holder.id, "seats": [{"row": 0, "col": 0}, {"row": 0, "col": 1}]},
    )

    response = await client.post(
        f"/api/v1/shows/{nova_show.id}/bookings",
        json={"holder_id": other_holder.id, "seats": [{"row": 0, "col": 0}, {"row": 1, "col": 0}]},
    )

    assert response.status_code == 409
    data = response.json()
    assert data["status"] == "conflict"
    assert {(s["row"], s["col"]) for s in data["reserved"]} == {(0, 0), (0, 1)}

    seat_map = await client.get(f"/api/v1/shows/{nova_show.id}/seats")
    assert {s["name"] for s in seat_map.json()["reserved"]} == {"A1", "A2"}


@pytest.mark.asyncio
async def test_concurrent_bookings_one_winner(client: AsyncClient, nova_show, holder, other_holder):
    responses = await asyncio.gather(*(
        client.post(
            f"/api/v1/shows/{nova_show.id}/bookings",
            json={"holder_id": h.id, "seats": [{"row": 1, "col": 1}]},
        )
        for h in (holder, other_holder)
    ))

    assert sorted(r.status_code for r in responses) == [201, 409]


@pytest.mark.asyncio
async def test_book_empty_selection(client: AsyncClient, nova_show, holder):
    response = await client.post(
        f"/api/v1/shows/{nova_show.id}/bookings",
        json={"holder_id": holder.id, "seats": []},
    )
    assert response.status_code == 422
    assert response.json()["code"] == "EMPTY_SELECTION"


@pytest.mark.asyncio
async def test_book_outside_grid(client: AsyncClient, nova_show, holder):
    response = await client.post(
        f"/api/v1/shows/{nova_show.id}/bookings",
        json={"holder_id": holder.id, "seats": [{"row": 5, "col": 5}]},
    )
    assert response.status_code == 422
    assert response.json()["code"] == "INVALID_COORDINATE"


@pytest.mark.asyncio
async def test_book_negative_coordinate_rejected_by_schema(client: AsyncClient, nova_show, holder):
    response = await client.post(
        f"/api/v1/shows/{nova_show.id}/bookings",
        json={"holder_id": holder.id, "seats": [{"row": -1, "col": 0}]},
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_book_unknown_holder(client: AsyncClient, nova_show):
    response = await client.post(
        f"/api/v1/shows/{nova_show.id}/bookings",
        json={"holder_id": 9999, "seats": [{"row": 0, "col": 0}]},
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_book_unknown_show(client: AsyncClient, holder):
    response = await client.post(
        "/api/v1/shows/9999/bookings",
        json={"holder_id": holder.id, "seats": [{"row": 0, "col": 0}]},
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_health_and_metrics(client: AsyncClient):
    health = await client.get("/health")
    assert health.status_code == 200
    assert health.json()["cache"] == {"status": "disabled"}

    metrics = await client.get("/metrics")
    assert metrics.status_code == 200
    assert "booking_attempts_total" in metrics.text


@pytest.mark.asyncio
async def test_seat_map_store_failure_returns_503(client: AsyncClient, nova_show, unreachable_factory):
    app.dependency_overrides[get_ledger] = lambda: ReservationLedger(unreachable_factory)

    response = await client.get(f"/api/v1/shows/{nova_show.id}/seats")

    assert response.status_code == 503
    assert response.json()["code"] == "STORAGE_ERROR"


@pytest.mark.asyncio
async def test_booking_load_failure_returns_503(client: AsyncClient, nova_show, holder, unreachable_factory):
    app.dependency_overrides[get_ledger] = lambda: ReservationLedger(unreachable_factory)

    response = await client.post(
        f"/api/v1/shows/{nova_show.id}/bookings",
        json={"holder_id": holder.id, "seats": [{"row": 0, "col": 0}]},
    )

    assert response.status_code == 503
    assert response.json()["code"] == "STORAGE_ERROR"


@pytest.mark.asyncio
async def test_catalog_read_failure_returns_503(client: AsyncClient, unreachable_factory):
    async def broken_db():
        async with unreachable_factory() as session:
            yield session

    app.dependency_overrides[get_db] = broken_db

    assert (await client.get("/api/v1/shows/1")).status_code == 503
    assert (await client.get("/api/v1/tickets/1")).status_code == 503
