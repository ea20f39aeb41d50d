"""레포지토리 쿼리 테스트 — 기간/상태/주차장별 조회와 컬럼 갱신.

Repository query tests — Period, status and lot lookups plus column setters.
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest_asyncio
from sqlalchemy import select

from app.models.parking import ParkingActivity, ParkingSaleActivity, ParkingStatus
from app.models.user import AuthorityName
from app.repositories.parking_activity_repository import parking_activity_repository
from app.repositories.plan_repository import parking_plan_repository
from app.services.parking_activity_service import parking_activity_service
from app.services.sales_activity_service import sales_activity_service
from tests.conftest import make_plan, make_user

T0 = datetime(2026, 3, 1, 8, 0, tzinfo=timezone.utc)


@pytest_asyncio.fixture
async def activities(db, driver, authorities):
    """운전자 3건, 다른 사용자 1건의 주차 활동."""
    other = await make_user(db, [authorities[AuthorityName.USER]], "other@example.com", "5550444")
    rows = [
        ParkingActivity(user_id=driver.id, lot_id=1, parking_status=ParkingStatus.EXITED, created_at=T0),
        ParkingActivity(user_id=driver.id, lot_id=1, parking_status=ParkingStatus.PARKED,
                        created_at=T0 + timedelta(hours=1)),
        ParkingActivity(user_id=driver.id, lot_id=2, parking_status=ParkingStatus.PARKED,
                        created_at=T0 + timedelta(hours=2)),
        ParkingActivity(user_id=other.id, lot_id=2, parking_status=ParkingStatus.EXCEPTION,
                        created_at=T0 + timedelta(hours=3)),
    ]
    db.add_all(rows)
    await db.flush()
    return rows


class TestParkingActivityQueries:
    """주차 활동 조회 쿼리."""

    async def test_between_bounds_are_exclusive(self, db, activities):
        found = await parking_activity_repository.get_parking_activity_between(
            db, T0, T0 + timedelta(hours=3)
        )
        assert [a.id for a in found] == [activities[1].id, activities[2].id]

    async def test_between_for_user(self, db, driver, activities):
        found = await parking_activity_repository.get_parking_activity_between_for_user(
            db, T0 - timedelta(minutes=1), T0 + timedelta(days=1), driver
        )
        assert len(found) == 3

    async def test_by_type_between(self, db, activities):
        found = await parking_activity_repository.get_parking_activity_by_type_between(
            db, T0 - timedelta(minutes=1), T0 + timedelta(days=1), ParkingStatus.PARKED
        )
        assert [a.lot_id for a in found] == [1, 2]

    async def test_find_all_by_status(self, db, activities):
        found = await parking_activity_repository.find_all_by_status(db, ParkingStatus.EXCEPTION)
        assert [a.id for a in found] == [activities[3].id]

    async def test_by_user(self, db, driver, activities):
        found = await parking_activity_repository.get_parking_activities_by_user(db, driver)
        assert [a.id for a in found] == [a.id for a in activities[:3]]

    async def test_latest_by_user_and_status(self, db, driver, activities):
        found = await parking_activity_repository.get_parking_activity_by_user_and_status(
            db, driver, ParkingStatus.PARKED
        )
        assert found.id == activities[2].id

    async def test_by_lot(self, db, activities):
        found = await parking_activity_repository.get_parking_activities_by_lot_id(db, 2)
        assert [a.id for a in found] == [activities[2].id, activities[3].id]

    async def test_latest_for_user(self, db, driver, activities):
        latest = await parking_activity_service.get_latest_activity_for_user(db, driver)
        assert latest.id == activities[2].id


class TestParkingActivitySetters:
    """컬럼 갱신."""

    async def test_set_gate_response(self, db, activities):
        await parking_activity_service.set_gate_response(db, activities[1].id, "DENIED")
        assert activities[1].gate_response == "DENIED"

    async def test_flag_exception(self, db, activities):
        await parking_activity_service.flag_exception(db, activities[1].id, "plate mismatch")
        assert activities[1].exception_flag == "plate mismatch"

        stored = await db.scalar(
            select(ParkingActivity.exception_flag).where(ParkingActivity.id == activities[1].id)
        )
        assert stored == "plate mismatch"

    async def test_set_status_updates_loaded_instance(self, db, activities):
        await parking_activity_repository.set_parking_status_by_id(db, ParkingStatus.EXCEPTION, activities[2].id)
        assert activities[2].parking_status == ParkingStatus.EXCEPTION

    async def test_unknown_id_is_ignored(self, db, activities):
        await parking_activity_repository.set_gate_response(db, "OPEN", uuid.uuid4())
        assert all(a.gate_response is None for a in activities)


class TestPlanAndSaleQueries:
    """요금제/판매 활동 조회."""

    async def test_plans_by_lot(self, db):
        await make_plan(db, "Weekend", 4, 10.0)
        await make_plan(db, "Annual", 4, 300.0)
        await make_plan(db, "Other", 5, 1.0)

        plans = await parking_plan_repository.get_plans_by_lot_id(db, 4)
        assert [p.plan_name for p in plans] == ["Annual", "Weekend"]

    async def test_sale_activity_between(self, db, driver):
        for hours in (0, 1, 2):
            db.add(ParkingSaleActivity(user_id=driver.id, plan_name=f"h{hours}", created_at=T0 + timedelta(hours=hours)))
        await db.flush()

        found = await sales_activity_service.find_all_activity_between(db, T0, T0 + timedelta(hours=2))
        assert [a.plan_name for a in found] == ["h1"]
