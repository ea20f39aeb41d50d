"""Stripe 결제 클라이언트 단위 테스트 — 네트워크 호출 없음.

Stripe payment client unit tests. No network calls are made.
"""

from types import SimpleNamespace

import pytest

from app.services.payment_service import StripePaymentClient, _invoice_subscription_id
from app.utils.exceptions import PaymentError


class TestInvoiceSubscriptionId:
    """인보이스에서 구독 ID 추출."""

    def test_top_level_subscription(self):
        assert _invoice_subscription_id(SimpleNamespace(id="in_1", subscription="sub_1")) == "sub_1"

    def test_nested_under_parent(self):
        invoice = SimpleNamespace(
            id="in_1",
            parent=SimpleNamespace(subscription_details=SimpleNamespace(subscription="sub_2")),
        )
        assert _invoice_subscription_id(invoice) == "sub_2"

    def test_expanded_subscription_object(self):
        invoice = SimpleNamespace(id="in_1", subscription=SimpleNamespace(id="sub_3"))
        assert _invoice_subscription_id(invoice) == "sub_3"

    def test_no_subscription(self):
        assert _invoice_subscription_id(SimpleNamespace(id="in_1", parent=None)) is None


class TestStripePaymentClient:
    """API 키 미설정 시 동작."""

    async def test_missing_api_key_raises_payment_error(self):
        client = StripePaymentClient(api_key="")
        with pytest.raises(PaymentError):
            await client.create_customer("new@example.com", "tok_visa")
