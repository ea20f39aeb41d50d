"""구독 서비스 — 요금제 구독과 무료 요금제 자동 구독.

Subscription Service — Plan subscription through the payment provider and
automatic subscription to free plans at registration.

subscribe_plan reports its outcome as a string (subscription id on success);
the eligibility row is looked up before the provider is charged so a
subscription is never created for a row that cannot be flagged.
"""

import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.parking import ParkingPlan, PlanEligibleUser, PlanSubscription
from app.models.user import User
from app.repositories.plan_repository import (
    parking_plan_repository,
    plan_eligible_user_repository,
    plan_subscription_repository,
)
from app.services.payment_service import PaymentClient
from app.services.sales_activity_service import sales_activity_service
from app.services.user_service import user_service
from app.utils.exceptions import NotFoundError, PaymentError

logger = logging.getLogger(__name__)


class SubscribeResult:
    """구독 결과 문자열 — Subscription outcome strings."""

    ALREADY_SUBSCRIBED: str = "Already Subscribed"
    CUSTOMER_RETRIEVE_FAILED: str = "Failed at retrieving customer information"
    SUBSCRIBE_FAILED: str = "Subscribe Failed"
    FAILED_UNEXPECTED: str = "Failed unexpected"


class SubscriptionService:
    """구독 관련 비즈니스 로직을 처리하는 서비스."""

    async def _get_plan(self, db: AsyncSession, plan_id: UUID) -> ParkingPlan:
        plan: ParkingPlan | None = await parking_plan_repository.get_one_parking_plan_by_id(db, plan_id)
        if plan is None:
            raise NotFoundError("Parking plan not found")
        return plan

    async def auto_subscribe(
        self,
        db: AsyncSession,
        user: User,
        plan_id: UUID,
    ) -> PlanSubscription:
        """무료 요금제에 결제 없이 구독시킵니다.

        Subscribe the user to a free plan without touching the payment
        provider: record a zero-charge subscription and flag the matching
        eligibility row.
        """
        plan: ParkingPlan = await self._get_plan(db, plan_id)
        subscription: PlanSubscription = await plan_subscription_repository.create(db, {
            "user_id": user.id,
            "plan_id": plan.id,
            "plan_charge_amount": 0.0,
            "plan_start_date": datetime.now(timezone.utc),
        })
        eligibility: PlanEligibleUser | None = await plan_eligible_user_repository.find_one_by_user_email_and_plan(
            db, user.login, plan.id
        )
        if eligibility is not None:
            eligibility.subscribed = True
            await db.flush()
        logger.info("Auto-subscribed %s to free plan %s", user.login, plan.plan_name)
        return subscription

    async def subscribe_plan(
        self,
        db: AsyncSession,
        payment: PaymentClient,
        user_email: str,
        plan_id: UUID,
    ) -> str:
        """사용자를 요금제에 구독시킵니다.

        Subscribe the user to a plan through the payment provider.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            payment: 결제 클라이언트 (Payment client)
            user_email: 사용자 로그인 이메일 (User login e-mail)
            plan_id: 요금제 UUID (Plan UUID)

        Returns:
            str: 성공 시 제공자 구독 ID, 실패 시 SubscribeResult 문자열
                 (Provider subscription id, or one of the SubscribeResult strings)

        Raises:
            NotFoundError: 사용자 또는 요금제가 없을 때 (User or plan not found)
        """
        user: User = await user_service.get_user(db, user_email)
        plan: ParkingPlan = await self._get_plan(db, plan_id)

        eligibility: PlanEligibleUser | None = await plan_eligible_user_repository.find_one_by_user_email_and_plan(
            db, user_email, plan.id
        )
        if eligibility is not None and eligibility.subscribed:
            return SubscribeResult.ALREADY_SUBSCRIBED
        if eligibility is None:
            logger.error("No eligibility row for %s on plan %s", user_email, plan.id)
            return SubscribeResult.FAILED_UNEXPECTED

        if not user.stripe_token:
            return SubscribeResult.CUSTOMER_RETRIEVE_FAILED
        try:
            customer_id: str = await payment.retrieve_customer(user.stripe_token)
        except PaymentError:
            return SubscribeResult.CUSTOMER_RETRIEVE_FAILED

        try:
            subscription_id: str = await payment.create_subscription(
                customer_id, plan.payment_plan_id or str(plan.id)
            )
        except PaymentError as exc:
            logger.warning("Subscription to plan %s failed for %s: %s", plan.id, user_email, exc)
            return SubscribeResult.SUBSCRIBE_FAILED
        logger.debug("Subscribed %s to provider subscription %s", user_email, subscription_id)

        eligibility.subscribed = True
        subscription: PlanSubscription = await plan_subscription_repository.create(db, {
            "user_id": user.id,
            "plan_id": plan.id,
            "stripe_id": subscription_id,
            "plan_charge_amount": plan.unit_charge_amount,
            "plan_start_date": datetime.now(timezone.utc),
            "payment_profile_id": customer_id,
        })
        await sales_activity_service.create_sale_activity_with_plan(db, payment, user, subscription)
        return subscription_id


# 싱글턴 인스턴스 — Singleton instance
subscription_service: SubscriptionService = SubscriptionService()
