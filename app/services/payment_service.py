"""결제 서비스 — Stripe 고객, 구독, 인보이스 연동.

Payment Service — Stripe customer, subscription and invoice calls.
Services depend on the PaymentClient protocol and receive the concrete
client through the get_payment_client dependency, so tests can swap in a fake.
Every stripe.StripeError is converted to PaymentError at this boundary.
"""

import logging
from dataclasses import dataclass
from typing import Any, Protocol

import stripe

from app.config import settings
from app.utils.exceptions import PaymentError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InvoiceSummary:
    """인보이스 요약 — 매칭에 필요한 필드만 보관.

    Attributes:
        id: 인보이스 ID (Provider invoice id)
        subscription_id: 연결된 구독 ID (Subscription the invoice bills, may be None)
    """

    id: str
    subscription_id: str | None


class PaymentClient(Protocol):
    """결제 제공자 클라이언트 인터페이스 — Payment provider client interface."""

    async def create_customer(self, email: str, card_token: str | None) -> str: ...

    async def retrieve_customer(self, customer_id: str) -> str: ...

    async def create_subscription(self, customer_id: str, plan_ref: str) -> str: ...

    async def list_invoices(self, customer_id: str, limit: int) -> list[InvoiceSummary]: ...


def _invoice_subscription_id(invoice: Any) -> str | None:
    """인보이스의 구독 ID 추출 — API 버전에 따라 위치가 다름.

    Older API versions expose invoice.subscription; newer ones nest it
    under invoice.parent.subscription_details.subscription.
    """
    subscription: Any = getattr(invoice, "subscription", None)
    if subscription is None:
        parent: Any = getattr(invoice, "parent", None)
        details: Any = getattr(parent, "subscription_details", None) if parent is not None else None
        subscription = getattr(details, "subscription", None) if details is not None else None
    if subscription is not None and not isinstance(subscription, str):
        # 확장된 객체 — expanded Subscription object
        subscription = getattr(subscription, "id", None)
    return subscription


class StripePaymentClient:
    """Stripe SDK 기반 결제 클라이언트.

    Payment client backed by the official stripe SDK (async methods over httpx).
    The StripeClient is built lazily on first use.
    """

    def __init__(self, api_key: str | None = None) -> None:
        self._api_key: str = api_key if api_key is not None else settings.STRIPE_API_KEY
        self._client: stripe.StripeClient | None = None

    @property
    def client(self) -> stripe.StripeClient:
        if self._client is None:
            if not self._api_key:
                raise PaymentError("Stripe API key is not configured")
            self._client = stripe.StripeClient(self._api_key, http_client=stripe.HTTPXClient())
        return self._client

    async def create_customer(self, email: str, card_token: str | None) -> str:
        """고객을 생성하고 고객 ID를 반환합니다.

        Create a customer (attaching the card token as its source when given).

        Args:
            email: 고객 이메일 (Customer e-mail)
            card_token: 클라이언트에서 토큰화한 카드 (Card token from the client SDK)

        Returns:
            str: 고객 ID (Customer id, stored as User.stripe_token)

        Raises:
            PaymentError: Stripe 호출 실패 시 (On any Stripe failure)
        """
        params: dict[str, Any] = {"email": email}
        if card_token:
            params["source"] = card_token
        try:
            customer = await self.client.customers.create_async(params=params)
        except stripe.StripeError as exc:
            logger.warning("Stripe customer creation failed for %s: %s", email, exc)
            raise PaymentError(str(exc)) from exc
        return customer.id

    async def retrieve_customer(self, customer_id: str) -> str:
        """고객을 조회하여 존재를 확인합니다."""
        try:
            customer = await self.client.customers.retrieve_async(customer_id)
        except stripe.StripeError as exc:
            raise PaymentError(str(exc)) from exc
        return customer.id

    async def create_subscription(self, customer_id: str, plan_ref: str) -> str:
        """고객을 요금제(가격)에 구독시키고 구독 ID를 반환합니다."""
        try:
            subscription = await self.client.subscriptions.create_async(
                params={"customer": customer_id, "items": [{"price": plan_ref}]}
            )
        except stripe.StripeError as exc:
            raise PaymentError(str(exc)) from exc
        return subscription.id

    async def list_invoices(self, customer_id: str, limit: int) -> list[InvoiceSummary]:
        """고객의 최근 인보이스를 최신순으로 반환합니다.

        Return the customer's latest invoices, newest first.
        """
        try:
            invoices = await self.client.invoices.list_async(
                params={"customer": customer_id, "limit": limit}
            )
        except stripe.StripeError as exc:
            raise PaymentError(str(exc)) from exc
        return [
            InvoiceSummary(id=invoice.id, subscription_id=_invoice_subscription_id(invoice))
            for invoice in invoices.data
        ]


# 싱글턴 인스턴스 — Singleton instance
stripe_payment_client: StripePaymentClient = StripePaymentClient()


def get_payment_client() -> PaymentClient:
    """FastAPI 의존성 — 결제 클라이언트 주입 (Injects the payment client)."""
    return stripe_payment_client
