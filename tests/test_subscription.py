"""요금제/구독 API 테스트 — 요금제 목록, 구독 결과 문자열, 판매 기록 생성.

Plan and subscription API tests — Plan listing, subscription result strings
and the sale record created on success.
"""

import uuid

from httpx import AsyncClient
from sqlalchemy import select

from app.models.parking import ParkingSaleActivity, PlanSubscription
from app.services.payment_service import InvoiceSummary
from tests.conftest import auth_header, make_eligibility, make_token, make_user

API = "/api/v1"


class TestListPlans:
    """GET /plans 테스트."""

    async def test_lists_eligible_plans_with_flag(
        self, client: AsyncClient, db, driver, driver_token, free_plan, paid_plan
    ):
        await make_eligibility(db, driver.login, free_plan, subscribed=True)
        await make_eligibility(db, driver.login, paid_plan)
        await make_eligibility(db, "someone-else@example.com", paid_plan)

        res = await client.get(f"{API}/plans", headers=auth_header(driver_token))
        assert res.status_code == 200
        by_id = {p["plan_id"]: p for p in res.json()}
        assert set(by_id) == {str(free_plan.id), str(paid_plan.id)}
        assert by_id[str(free_plan.id)]["subscribed"] is True
        assert by_id[str(paid_plan.id)]["subscribed"] is False
        assert by_id[str(paid_plan.id)]["plan_charge_amount"] == 50.0


class TestSubscribe:
    """POST /plans/{plan_id}/subscribe 테스트."""

    async def _subscribe(self, client: AsyncClient, token: str, plan_id) -> str:
        res = await client.post(f"{API}/plans/{plan_id}/subscribe", headers=auth_header(token))
        assert res.status_code == 200
        return res.json()["result"]

    async def test_success_records_subscription_and_sale(
        self, client: AsyncClient, db, driver, driver_token, paid_plan, payment
    ):
        row = await make_eligibility(db, driver.login, paid_plan)
        payment.invoices = [
            InvoiceSummary(id="in_other", subscription_id="sub_other"),
            InvoiceSummary(id="in_match", subscription_id="sub_123"),
        ]

        result = await self._subscribe(client, driver_token, paid_plan.id)
        assert result == "sub_123"
        assert ("retrieve_customer", "cus_driver") in payment.calls
        assert ("create_subscription", "cus_driver", "price_monthly") in payment.calls
        assert row.subscribed is True

        subscription = (await db.execute(select(PlanSubscription))).scalar_one()
        assert subscription.stripe_id == "sub_123"
        assert subscription.plan_charge_amount == 50.0
        assert subscription.payment_profile_id == "cus_driver"

        sale = (await db.execute(select(ParkingSaleActivity))).scalar_one()
        assert sale.invoice_id == "in_match"
        assert sale.plan_name == "Monthly"
        assert sale.lot_id == 2
        assert sale.user_email == driver.login
        assert sale.user_phone_number == "5550001"
        assert sale.charge_amount == 50.0
        assert sale.service_amount == 5.0
        assert sale.net_amount == 45.0
        assert sale.pp_id == "cus_driver"

    async def test_invoice_lookup_failure_leaves_invoice_empty(
        self, client: AsyncClient, db, driver, driver_token, paid_plan, payment
    ):
        await make_eligibility(db, driver.login, paid_plan)
        payment.fail.add("list_invoices")

        result = await self._subscribe(client, driver_token, paid_plan.id)
        assert result == "sub_123"
        sale = (await db.execute(select(ParkingSaleActivity))).scalar_one()
        assert sale.invoice_id is None

    async def test_invoice_scan_is_limited(
        self, client: AsyncClient, db, driver, driver_token, paid_plan, payment
    ):
        await make_eligibility(db, driver.login, paid_plan)
        payment.invoices = [InvoiceSummary(id=f"in_{i}", subscription_id="sub_other") for i in range(3)]
        payment.invoices.append(InvoiceSummary(id="in_late", subscription_id="sub_123"))

        await self._subscribe(client, driver_token, paid_plan.id)
        sale = (await db.execute(select(ParkingSaleActivity))).scalar_one()
        assert sale.invoice_id is None
        assert ("list_invoices", "cus_driver", 3) in payment.calls

    async def test_already_subscribed(self, client: AsyncClient, db, driver, driver_token, paid_plan, payment):
        await make_eligibility(db, driver.login, paid_plan, subscribed=True)

        assert await self._subscribe(client, driver_token, paid_plan.id) == "Already Subscribed"
        assert payment.calls == []

    async def test_no_eligibility_row(self, client: AsyncClient, driver, driver_token, paid_plan, payment):
        assert await self._subscribe(client, driver_token, paid_plan.id) == "Failed unexpected"
        assert payment.calls == []

    async def test_customer_retrieval_fails(self, client: AsyncClient, db, driver, driver_token, paid_plan, payment):
        await make_eligibility(db, driver.login, paid_plan)
        payment.fail.add("retrieve_customer")

        result = await self._subscribe(client, driver_token, paid_plan.id)
        assert result == "Failed at retrieving customer information"
        assert not payment.called("create_subscription")

    async def test_user_without_customer_token(
        self, client: AsyncClient, db, authorities, paid_plan, payment
    ):
        user = await make_user(db, [authorities["ROLE_USER"]], "plain@example.com", "5550222")
        await make_eligibility(db, user.login, paid_plan)

        result = await self._subscribe(client, make_token(user), paid_plan.id)
        assert result == "Failed at retrieving customer information"
        assert payment.calls == []

    async def test_subscription_creation_fails(
        self, client: AsyncClient, db, driver, driver_token, paid_plan, payment
    ):
        row = await make_eligibility(db, driver.login, paid_plan)
        payment.fail.add("create_subscription")

        assert await self._subscribe(client, driver_token, paid_plan.id) == "Subscribe Failed"
        assert row.subscribed is False
        assert (await db.execute(select(PlanSubscription))).scalars().all() == []

    async def test_unknown_plan(self, client: AsyncClient, driver, driver_token):
        res = await client.post(f"{API}/plans/{uuid.uuid4()}/subscribe", headers=auth_header(driver_token))
        assert res.status_code == 404
