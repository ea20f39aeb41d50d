"""주차 활동 API 테스트 — 입차, 출차, 상태 변경, 이력 페이지 조회.

Parking activity API tests — Entry, exit, admin status change and history paging.
"""

import uuid

from httpx import AsyncClient
from sqlalchemy import select

from app.models.parking import ParkingActivity, ParkingSaleActivity
from app.services.subscription_service import subscription_service
from tests.conftest import auth_header, make_token, make_user

PARKING = "/api/v1/parking"


async def _enter(client: AsyncClient, token: str, lot_id: int = 1) -> dict:
    res = await client.post(f"{PARKING}/entry", headers=auth_header(token), json={"lot_id": lot_id})
    assert res.status_code == 201
    return res.json()


class TestEntry:
    """POST /parking/entry 테스트."""

    async def test_entry_creates_parked_activity(self, client: AsyncClient, db, driver, driver_token):
        data = await _enter(client, driver_token, lot_id=3)
        assert data["lot_id"] == 3
        assert data["parking_status"] == "Parked"
        assert data["exit_datetime"] is None

        activity = (await db.execute(select(ParkingActivity))).scalar_one()
        assert activity.user_id == driver.id

    async def test_entry_without_plan_creates_no_sale(self, client: AsyncClient, db, driver, driver_token):
        await _enter(client, driver_token)
        assert (await db.execute(select(ParkingSaleActivity))).scalars().all() == []

    async def test_plan_holder_entry_opens_sale_record(
        self, client: AsyncClient, db, driver, driver_token, free_plan
    ):
        await subscription_service.auto_subscribe(db, driver, free_plan.id)

        await _enter(client, driver_token, lot_id=free_plan.lot_id)
        sale = (await db.execute(select(ParkingSaleActivity))).scalar_one()
        assert sale.plan_id == free_plan.id
        assert sale.charge_amount == 0.0
        assert sale.parking_status == "Parked"
        assert sale.entry_datetime is not None
        assert sale.exit_datetime is None

    async def test_plan_for_other_lot_ignored(self, client: AsyncClient, db, driver, driver_token, free_plan):
        await subscription_service.auto_subscribe(db, driver, free_plan.id)

        await _enter(client, driver_token, lot_id=free_plan.lot_id + 10)
        assert (await db.execute(select(ParkingSaleActivity))).scalars().all() == []


class TestExit:
    """POST /parking/{id}/exit 테스트."""

    async def test_exit_sets_time_and_status(self, client: AsyncClient, driver, driver_token):
        entry = await _enter(client, driver_token)

        res = await client.post(
            f"{PARKING}/{entry['id']}/exit", headers=auth_header(driver_token), json={"gate_response": "OPEN"}
        )
        assert res.status_code == 200
        data = res.json()
        assert data["parking_status"] == "Exited"
        assert data["exit_datetime"] is not None
        assert data["gate_response"] == "OPEN"

    async def test_exit_closes_in_flight_sale(self, client: AsyncClient, db, driver, driver_token, free_plan):
        await subscription_service.auto_subscribe(db, driver, free_plan.id)
        entry = await _enter(client, driver_token, lot_id=free_plan.lot_id)

        await client.post(f"{PARKING}/{entry['id']}/exit", headers=auth_header(driver_token), json={})
        sale = (await db.execute(select(ParkingSaleActivity))).scalar_one()
        assert sale.exit_datetime is not None
        assert sale.parking_status == "Exited"

    async def test_exit_twice_rejected(self, client: AsyncClient, driver, driver_token):
        entry = await _enter(client, driver_token)
        await client.post(f"{PARKING}/{entry['id']}/exit", headers=auth_header(driver_token), json={})

        res = await client.post(f"{PARKING}/{entry['id']}/exit", headers=auth_header(driver_token), json={})
        assert res.status_code == 400

    async def test_exit_of_other_users_activity(self, client: AsyncClient, db, authorities, driver, driver_token):
        entry = await _enter(client, driver_token)
        other = await make_user(db, [authorities["ROLE_USER"]], "other@example.com", "5550333")

        res = await client.post(
            f"{PARKING}/{entry['id']}/exit", headers=auth_header(make_token(other)), json={}
        )
        assert res.status_code == 404

    async def test_exit_unknown_activity(self, client: AsyncClient, driver, driver_token):
        res = await client.post(f"{PARKING}/{uuid.uuid4()}/exit", headers=auth_header(driver_token), json={})
        assert res.status_code == 404


class TestStatusChange:
    """PUT /parking/{id}/status 테스트 (ROLE_ADMIN)."""

    async def test_admin_sets_status_and_flag(self, client: AsyncClient, driver, driver_token, admin_user, admin_token):
        entry = await _enter(client, driver_token)

        res = await client.put(f"{PARKING}/{entry['id']}/status", headers=auth_header(admin_token), json={
            "parking_status": "Exception",
            "exception_flag": "gate did not open",
        })
        assert res.status_code == 200
        data = res.json()
        assert data["parking_status"] == "Exception"
        assert data["exception_flag"] == "gate did not open"

    async def test_driver_forbidden(self, client: AsyncClient, driver, driver_token):
        entry = await _enter(client, driver_token)

        res = await client.put(f"{PARKING}/{entry['id']}/status", headers=auth_header(driver_token), json={
            "parking_status": "Exited",
        })
        assert res.status_code == 403

    async def test_unknown_activity(self, client: AsyncClient, admin_user, admin_token):
        res = await client.put(f"{PARKING}/{uuid.uuid4()}/status", headers=auth_header(admin_token), json={
            "parking_status": "Exited",
        })
        assert res.status_code == 404


class TestHistory:
    """GET /parking/activities 테스트."""

    async def test_paginated_newest_first(self, client: AsyncClient, driver, driver_token):
        for lot_id in (1, 2, 3):
            await _enter(client, driver_token, lot_id=lot_id)

        res = await client.get(
            f"{PARKING}/activities", params={"page": 1, "per_page": 2}, headers=auth_header(driver_token)
        )
        assert res.status_code == 200
        data = res.json()
        assert data["total"] == 3
        assert data["pages"] == 2
        assert [a["lot_id"] for a in data["items"]] == [3, 2]

    async def test_account_shows_latest_activity(self, client: AsyncClient, driver, driver_token):
        await _enter(client, driver_token, lot_id=1)
        await _enter(client, driver_token, lot_id=9)

        data = (await client.get("/api/v1/account", headers=auth_header(driver_token))).json()
        assert data["parking_status"]["lot_id"] == 9
