"""계정 API 테스트 — 계정 조회/수정, 비밀번호 변경, 클라이언트 로그 저장.

Account API tests — Account read/update, password change and client log upload.
"""

from httpx import AsyncClient
from sqlalchemy import select

from app.models.exception_log import ExceptionLog
from app.models.parking import ParkingActivity
from app.services.exception_log_service import join_log_tail
from tests.conftest import auth_header, make_token, make_user

API = "/api/v1"


class TestGetAccount:
    """GET /account 테스트."""

    async def test_account_without_parking_activity(self, client: AsyncClient, driver, driver_token):
        res = await client.get(f"{API}/account", headers=auth_header(driver_token))
        assert res.status_code == 200
        data = res.json()
        assert data["id"] == str(driver.id)
        assert data["login"] == "driver@example.com"
        assert data["mobile_number"] == "5550001"
        assert data["license_plate"] == "ABC123"
        assert data["roles"] == ["ROLE_USER"]
        assert data["parking_status"] is None

    async def test_account_with_latest_activity(self, client: AsyncClient, db, driver, driver_token):
        db.add(ParkingActivity(user_id=driver.id, lot_id=7, parking_status="Parked"))
        await db.flush()

        res = await client.get(f"{API}/account", headers=auth_header(driver_token))
        status = res.json()["parking_status"]
        assert status["lot_id"] == 7
        assert status["parking_status"] == "Parked"
        assert status["exit_datetime"] is None


class TestUpdateAccount:
    """POST /account 테스트."""

    async def test_update_names_and_region(self, client: AsyncClient, driver, driver_token):
        res = await client.post(f"{API}/account", headers=auth_header(driver_token), json={
            "first_name": "Jamie",
            "last_name": "Lee",
            "region": "South",
        })
        assert res.status_code == 200

        data = (await client.get(f"{API}/account", headers=auth_header(driver_token))).json()
        assert data["first_name"] == "Jamie"
        assert data["last_name"] == "Lee"
        assert data["region"] == "South"
        # 휴대폰/번호판은 변경되지 않음 — mobile number and plate are untouched
        assert data["mobile_number"] == "5550001"

    async def test_update_requires_user_role(self, client: AsyncClient, db, authorities):
        no_role = await make_user(db, [], "norole@example.com", "5550555")
        res = await client.post(f"{API}/account", headers=auth_header(make_token(no_role)), json={
            "first_name": "X",
        })
        assert res.status_code == 403


class TestChangePassword:
    """POST /account/change_password 테스트."""

    async def test_too_short(self, client: AsyncClient, driver, driver_token):
        res = await client.post(
            f"{API}/account/change_password", headers=auth_header(driver_token), json={"password": "abcd"}
        )
        assert res.status_code == 400
        assert res.json() == {
            "message": "Password must be between 5 and 50 characters",
            "path": "api/account/change_password",
            "code": -1,
        }

    async def test_too_long(self, client: AsyncClient, driver, driver_token):
        res = await client.post(
            f"{API}/account/change_password", headers=auth_header(driver_token), json={"password": "x" * 51}
        )
        assert res.status_code == 400

    async def test_missing_password(self, client: AsyncClient, driver, driver_token):
        res = await client.post(f"{API}/account/change_password", headers=auth_header(driver_token), json={})
        assert res.status_code == 400
        assert res.json()["code"] == -1

    async def test_success_allows_login_with_new_password(self, client: AsyncClient, driver, driver_token):
        res = await client.post(
            f"{API}/account/change_password", headers=auth_header(driver_token), json={"password": "newpass1"}
        )
        assert res.status_code == 200

        old = await client.post(f"{API}/authenticate", json={"email": "driver@example.com", "password": "secret123"})
        assert old.status_code == 401
        new = await client.post(f"{API}/authenticate", json={"email": "driver@example.com", "password": "newpass1"})
        assert new.status_code == 200


class TestLogMessage:
    """POST /logMessage 테스트."""

    async def test_stores_last_forty_events(self, client: AsyncClient, db, driver, driver_token):
        events = [f"event {i}" for i in range(45)]
        res = await client.post(f"{API}/logMessage", headers=auth_header(driver_token), json={"log_event": events})
        assert res.status_code == 200

        log = (await db.execute(select(ExceptionLog))).scalar_one()
        assert log.user_id == driver.id
        assert log.log_message == "".join(f"event {i}\n" for i in range(5, 45))

    async def test_null_events_store_null_message(self, client: AsyncClient, db, driver, driver_token):
        res = await client.post(f"{API}/logMessage", headers=auth_header(driver_token), json={"log_event": None})
        assert res.status_code == 200

        log = (await db.execute(select(ExceptionLog))).scalar_one()
        assert log.log_message is None

    async def test_requires_authentication(self, client: AsyncClient):
        res = await client.post(f"{API}/logMessage", json={"log_event": ["x"]})
        assert res.status_code == 401


class TestJoinLogTail:
    """로그 이어 붙이기 단위 테스트."""

    def test_fewer_events_than_tail(self):
        assert join_log_tail(["a", "b"], 40) == "a\nb\n"

    def test_empty_list(self):
        assert join_log_tail([], 40) == ""

    def test_none(self):
        assert join_log_tail(None, 40) is None

    def test_keeps_only_tail(self):
        assert join_log_tail(["a", "b", "c"], 2) == "b\nc\n"
