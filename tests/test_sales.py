"""판매 활동 테스트 — 필터 규칙, 진행 중 활동, GET /sales.

Sales activity tests — Filter rules, in-flight lookup and GET /sales.
"""

from datetime import datetime, timedelta, timezone

from httpx import AsyncClient

from app.models.parking import ParkingSaleActivity
from app.services.sales_activity_service import sales_activity_service
from tests.conftest import auth_header

NOW = datetime(2026, 5, 1, 9, 0, tzinfo=timezone.utc)


def _sale(name: str, entry: datetime | None, exit_: datetime | None, charge: float | None) -> ParkingSaleActivity:
    return ParkingSaleActivity(
        plan_name=name, entry_datetime=entry, exit_datetime=exit_, charge_amount=charge
    )


IN_FLIGHT = _sale("in_flight", NOW, None, 0.0)
COMPLETED = _sale("completed", NOW, NOW + timedelta(hours=2), 0.0)
CHARGED = _sale("charged", None, None, 50.0)
BLANK = _sale("blank", None, None, None)
ALL = [COMPLETED, BLANK, IN_FLIGHT, CHARGED]


def _names(activities) -> list[str]:
    return [a.plan_name for a in activities]


class TestFilter:
    """sale / record / in_flight 필터 규칙."""

    def test_no_flags_returns_everything(self):
        assert _names(sales_activity_service.filter(ALL, False, False, False)) == [
            "completed", "blank", "in_flight", "charged",
        ]

    def test_in_flight_only(self):
        assert _names(sales_activity_service.filter(ALL, False, False, True)) == ["in_flight"]

    def test_in_flight_overrides_other_flags(self):
        assert _names(sales_activity_service.filter(ALL, True, True, True)) == ["in_flight"]

    def test_non_matching_first_entry_does_not_stop_scan(self):
        # 첫 항목이 불일치해도 이후 항목을 계속 검사 — later matches are still found
        assert _names(sales_activity_service.filter([COMPLETED, IN_FLIGHT], False, False, True)) == ["in_flight"]

    def test_sale_and_record(self):
        assert _names(sales_activity_service.filter(ALL, True, True, False)) == ["completed", "in_flight"]

    def test_sale_only_requires_positive_charge(self):
        assert _names(sales_activity_service.filter(ALL, True, False, False)) == ["charged"]

    def test_record_only(self):
        assert _names(sales_activity_service.filter(ALL, False, True, False)) == ["completed", "in_flight"]

    def test_empty_input(self):
        assert sales_activity_service.filter([], True, False, False) == []


class TestSalesEndpoint:
    """GET /sales 테스트."""

    async def _seed(self, db, user) -> None:
        for name, entry, exit_, charge in [
            ("charged", None, None, 50.0),
            ("in_flight", NOW, None, 0.0),
            ("completed", NOW - timedelta(days=1), NOW - timedelta(hours=20), 0.0),
        ]:
            db.add(ParkingSaleActivity(
                user_id=user.id, plan_name=name, entry_datetime=entry, exit_datetime=exit_, charge_amount=charge
            ))
        await db.flush()

    async def test_no_filter(self, client: AsyncClient, db, driver, driver_token):
        await self._seed(db, driver)
        res = await client.get("/api/v1/sales", headers=auth_header(driver_token))
        assert res.status_code == 200
        assert sorted(a["plan_name"] for a in res.json()) == ["charged", "completed", "in_flight"]

    async def test_sale_filter(self, client: AsyncClient, db, driver, driver_token):
        await self._seed(db, driver)
        res = await client.get("/api/v1/sales", params={"sale": "true"}, headers=auth_header(driver_token))
        data = res.json()
        assert [a["plan_name"] for a in data] == ["charged"]
        assert data[0]["charge_amount"] == 50.0
        assert data[0]["user_id"] == str(driver.id)

    async def test_in_flight_filter(self, client: AsyncClient, db, driver, driver_token):
        await self._seed(db, driver)
        res = await client.get("/api/v1/sales", params={"in_flight": "true"}, headers=auth_header(driver_token))
        assert [a["plan_name"] for a in res.json()] == ["in_flight"]

    async def test_only_own_activities(self, client: AsyncClient, db, driver, admin_user, admin_token):
        await self._seed(db, driver)
        res = await client.get("/api/v1/sales", headers=auth_header(admin_token))
        assert res.json() == []

    async def test_find_in_flight_activity_by_user(self, db, driver):
        await self._seed(db, driver)
        in_flight = await sales_activity_service.find_in_flight_activity_by_user(db, driver)
        assert _names(in_flight) == ["in_flight"]
