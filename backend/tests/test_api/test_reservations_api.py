"""Tests for the reservation endpoints."""

import uuid
from datetime import date

import pytest
from httpx import AsyncClient

from conftest import make_cabin, make_reservation

pytestmark = pytest.mark.asyncio


def _payload(cabin, guest: dict, start: str, end: str, **extra) -> dict:
    return {"cabin_id": str(cabin.id), "start_date": start, "end_date": end, "guest": guest, **extra}


# ---------------------------------------------------------------------------
# POST /api/v1/reservations
# ---------------------------------------------------------------------------


class TestCreateReservation:
    async def test_create_success(
        self, client: AsyncClient, admin_headers: dict, admin_user, test_cabin, guest_payload: dict
    ) -> None:
        response = await client.post(
            "/api/v1/reservations",
            json=_payload(test_cabin, guest_payload, "2024-06-03", "2024-06-04"),
            headers=admin_headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["cabin_id"] == str(test_cabin.id)
        assert data["status"] == "confirmed"
        assert data["paid"] is False
        assert data["created_by_id"] == str(admin_user.id)
        assert data["guest"]["first_name"] == "Lucía"
        assert data["guest"]["email"] == "lucia@example.com"
        assert data["quote"]["total"] == data["total_price"]
        assert [d["date"] for d in data["quote"]["days"]] == ["2024-06-03", "2024-06-04"]

    async def test_price_is_never_taken_from_client(
        self, client: AsyncClient, admin_headers: dict, test_cabin, guest_payload: dict
    ) -> None:
        response = await client.post(
            "/api/v1/reservations",
            json=_payload(test_cabin, guest_payload, "2024-06-03", "2024-06-04", total_price=1),
            headers=admin_headers,
        )
        assert response.status_code == 201
        assert response.json()["total_price"] > 1

    async def test_overlap_is_409(
        self, client: AsyncClient, admin_headers: dict, db_session, test_cabin, guest_payload: dict
    ) -> None:
        existing = await make_reservation(db_session, test_cabin, date(2024, 6, 1), date(2024, 6, 5))

        response = await client.post(
            "/api/v1/reservations",
            json=_payload(test_cabin, guest_payload, "2024-06-04", "2024-06-06"),
            headers=admin_headers,
        )

        assert response.status_code == 409
        body = response.json()
        assert body["kind"] == "conflict"
        assert body["details"]["reservation_id"] == str(existing.id)

    async def test_back_to_back_is_accepted(
        self, client: AsyncClient, admin_headers: dict, db_session, test_cabin, guest_payload: dict
    ) -> None:
        await make_reservation(db_session, test_cabin, date(2024, 6, 1), date(2024, 6, 5))

        response = await client.post(
            "/api/v1/reservations",
            json=_payload(test_cabin, guest_payload, "2024-06-05", "2024-06-08"),
            headers=admin_headers,
        )
        assert response.status_code == 201

    async def test_unknown_cabin_is_404(self, client: AsyncClient, admin_headers: dict, guest_payload: dict) -> None:
        response = await client.post(
            "/api/v1/reservations",
            json={"cabin_id": str(uuid.uuid4()), "start_date": "2024-06-01", "end_date": "2024-06-02", "guest": guest_payload},
            headers=admin_headers,
        )
        assert response.status_code == 404
        assert response.json()["kind"] == "not_found"

    async def test_reversed_dates_rejected(
        self, client: AsyncClient, admin_headers: dict, test_cabin, guest_payload: dict
    ) -> None:
        response = await client.post(
            "/api/v1/reservations",
            json=_payload(test_cabin, guest_payload, "2024-06-05", "2024-06-01"),
            headers=admin_headers,
        )
        assert response.status_code == 422

    async def test_document_must_be_numeric(
        self, client: AsyncClient, admin_headers: dict, test_cabin, guest_payload: dict
    ) -> None:
        guest = {**guest_payload, "document": "30.111.222"}
        response = await client.post(
            "/api/v1/reservations",
            json=_payload(test_cabin, guest, "2024-06-01", "2024-06-02"),
            headers=admin_headers,
        )
        assert response.status_code == 422

    async def test_cancelled_status_not_accepted_on_create(
        self, client: AsyncClient, admin_headers: dict, test_cabin, guest_payload: dict
    ) -> None:
        response = await client.post(
            "/api/v1/reservations",
            json=_payload(test_cabin, guest_payload, "2024-06-01", "2024-06-02", status="cancelled"),
            headers=admin_headers,
        )
        assert response.status_code == 422

    async def test_regular_user_forbidden(
        self, client: AsyncClient, user_headers: dict, test_cabin, guest_payload: dict
    ) -> None:
        response = await client.post(
            "/api/v1/reservations",
            json=_payload(test_cabin, guest_payload, "2024-06-01", "2024-06-02"),
            headers=user_headers,
        )
        assert response.status_code == 403


# ---------------------------------------------------------------------------
# Listing and detail
# ---------------------------------------------------------------------------


class TestListReservations:
    async def test_filters(self, client: AsyncClient, admin_headers: dict, db_session, test_cabin) -> None:
        other = await make_cabin(db_session, "Cabaña del Bosque")
        await make_reservation(db_session, test_cabin, date(2024, 6, 1), date(2024, 6, 5))
        await make_reservation(db_session, test_cabin, date(2024, 7, 1), date(2024, 7, 5), status="cancelled")
        await make_reservation(db_session, other, date(2024, 6, 10), date(2024, 6, 12))

        by_cabin = await client.get(
            "/api/v1/reservations", params={"cabin_id": str(test_cabin.id)}, headers=admin_headers
        )
        assert by_cabin.json()["total"] == 2

        by_status = await client.get("/api/v1/reservations", params={"status": "cancelled"}, headers=admin_headers)
        assert [r["start_date"] for r in by_status.json()["items"]] == ["2024-07-01"]

        by_window = await client.get(
            "/api/v1/reservations", params={"start": "2024-06-05", "end": "2024-06-11"}, headers=admin_headers
        )
        assert [r["cabin_id"] for r in by_window.json()["items"]] == [str(other.id)]

    async def test_bad_status_filter(self, client: AsyncClient, admin_headers: dict) -> None:
        response = await client.get("/api/v1/reservations", params={"status": "archived"}, headers=admin_headers)
        assert response.status_code == 422

    async def test_half_window_rejected(self, client: AsyncClient, admin_headers: dict) -> None:
        response = await client.get("/api/v1/reservations", params={"start": "2024-06-01"}, headers=admin_headers)
        assert response.status_code == 400

    async def test_mine(
        self, client: AsyncClient, user_headers: dict, regular_user, db_session, test_cabin
    ) -> None:
        own = await make_reservation(db_session, test_cabin, date(2024, 6, 1), date(2024, 6, 5))
        own.created_by_id = regular_user.id
        await db_session.flush()
        await make_reservation(db_session, test_cabin, date(2024, 6, 10), date(2024, 6, 12))

        response = await client.get("/api/v1/reservations/mine", headers=user_headers)

        assert response.status_code == 200
        assert [r["id"] for r in response.json()["items"]] == [str(own.id)]

    async def test_detail_includes_cabin(self, client: AsyncClient, admin_headers: dict, db_session, test_cabin) -> None:
        reservation = await make_reservation(db_session, test_cabin, date(2024, 6, 1), date(2024, 6, 5))

        response = await client.get(f"/api/v1/reservations/{reservation.id}", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["cabin"]["name"] == test_cabin.name

    async def test_detail_missing(self, client: AsyncClient, admin_headers: dict) -> None:
        response = await client.get(f"/api/v1/reservations/{uuid.uuid4()}", headers=admin_headers)
        assert response.status_code == 404


class TestOccupiedNights:
    async def test_public_and_half_open(self, client: AsyncClient, db_session, test_cabin) -> None:
        await make_reservation(db_session, test_cabin, date(2024, 6, 1), date(2024, 6, 3))
        await make_reservation(db_session, test_cabin, date(2024, 6, 5), date(2024, 6, 6), status="cancelled")

        response = await client.get("/api/v1/reservations/occupied", params={"cabin_id": str(test_cabin.id)})

        assert response.status_code == 200
        assert response.json()["nights"] == ["2024-06-01", "2024-06-02"]


# ---------------------------------------------------------------------------
# Updates, cancellation, deletion
# ---------------------------------------------------------------------------


class TestModifyReservation:
    async def test_update_dates_reprices(
        self, client: AsyncClient, admin_headers: dict, db_session, test_cabin
    ) -> None:
        reservation = await make_reservation(db_session, test_cabin, date(2024, 6, 3), date(2024, 6, 4))

        response = await client.put(
            f"/api/v1/reservations/{reservation.id}",
            json={"start_date": "2024-06-07", "end_date": "2024-06-08"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["start_date"] == "2024-06-07"
        assert response.json()["total_price"] > 0

    async def test_update_into_conflict(
        self, client: AsyncClient, admin_headers: dict, db_session, test_cabin
    ) -> None:
        await make_reservation(db_session, test_cabin, date(2024, 6, 10), date(2024, 6, 15))
        reservation = await make_reservation(db_session, test_cabin, date(2024, 6, 1), date(2024, 6, 5))

        response = await client.put(
            f"/api/v1/reservations/{reservation.id}", json={"end_date": "2024-06-11"}, headers=admin_headers
        )
        assert response.status_code == 409

    async def test_cancel_twice_and_rebook(
        self, client: AsyncClient, admin_headers: dict, db_session, test_cabin, guest_payload: dict
    ) -> None:
        reservation = await make_reservation(db_session, test_cabin, date(2024, 6, 1), date(2024, 6, 5))

        first = await client.post(f"/api/v1/reservations/{reservation.id}/cancel", headers=admin_headers)
        second = await client.post(f"/api/v1/reservations/{reservation.id}/cancel", headers=admin_headers)
        assert first.status_code == second.status_code == 200
        assert second.json()["status"] == "cancelled"

        rebook = await client.post(
            "/api/v1/reservations",
            json=_payload(test_cabin, guest_payload, "2024-06-01", "2024-06-05"),
            headers=admin_headers,
        )
        assert rebook.status_code == 201

    async def test_revive_cancelled_rejected(
        self, client: AsyncClient, admin_headers: dict, db_session, test_cabin
    ) -> None:
        reservation = await make_reservation(
            db_session, test_cabin, date(2024, 6, 1), date(2024, 6, 5), status="cancelled"
        )
        response = await client.put(
            f"/api/v1/reservations/{reservation.id}", json={"status": "confirmed"}, headers=admin_headers
        )
        assert response.status_code == 400
        assert response.json()["kind"] == "validation_error"

    async def test_delete(self, client: AsyncClient, admin_headers: dict, db_session, test_cabin) -> None:
        reservation = await make_reservation(db_session, test_cabin, date(2024, 6, 1), date(2024, 6, 5))

        response = await client.delete(f"/api/v1/reservations/{reservation.id}", headers=admin_headers)

        assert response.status_code == 200
        assert (await client.get(f"/api/v1/reservations/{reservation.id}", headers=admin_headers)).status_code == 404
