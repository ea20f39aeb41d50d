"""판매 활동 서비스 — 구독/요금제 기반 판매 기록 생성과 필터링.

Sales Activity Service — Builds sale records from subscriptions and plans,
correlates them with provider invoices, and filters sale history.
"""

import logging
from datetime import datetime, timezone
from typing import Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.parking import ParkingPlan, ParkingSaleActivity, ParkingStatus, PlanSubscription
from app.models.user import User
from app.repositories.plan_repository import parking_plan_repository
from app.repositories.sales_activity_repository import sales_activity_repository
from app.schemas.parking import SalesActivityResponse
from app.services.payment_service import InvoiceSummary, PaymentClient
from app.utils.exceptions import PaymentError

logger = logging.getLogger(__name__)


def _is_in_flight(activity: ParkingSaleActivity) -> bool:
    # 입차했고 아직 출차하지 않음 — entered and not yet exited
    return activity.entry_datetime is not None and activity.exit_datetime is None


class SalesActivityService:
    """판매 활동 비즈니스 로직을 처리하는 서비스."""

    def _split_charge(self, activity: ParkingSaleActivity, total_charge: float) -> None:
        """청구액을 서비스 수수료와 순수익으로 분할합니다."""
        fee: float = settings.SERVICE_FEE_PERCENTAGE
        activity.charge_amount = total_charge
        activity.service_amount = total_charge * fee
        activity.net_amount = total_charge * (1 - fee)

    def _copy_user(self, activity: ParkingSaleActivity, user: User) -> None:
        activity.user_id = user.id
        activity.user_email = user.login
        activity.user_phone_number = user.mobile_number
        activity.user_license_plate = user.license_plate

    async def _find_invoice_id(
        self,
        payment: PaymentClient,
        user: User,
        subscription: PlanSubscription,
    ) -> str | None:
        """최근 인보이스 중 구독 ID가 일치하는 첫 인보이스를 찾습니다.

        Scan the user's latest INVOICE_SCAN_LIMIT invoices and return the id
        of the first one billing this subscription. Provider failures and a
        missing customer token yield None.
        """
        if not user.stripe_token or not subscription.stripe_id:
            return None
        try:
            invoices: list[InvoiceSummary] = await payment.list_invoices(
                user.stripe_token, settings.INVOICE_SCAN_LIMIT
            )
        except PaymentError as exc:
            logger.warning("Invoice lookup failed for %s: %s", user.login, exc)
            return None
        for invoice in invoices:
            if invoice.subscription_id == subscription.stripe_id:
                return invoice.id
        return None

    async def create_sale_activity_with_plan(
        self,
        db: AsyncSession,
        payment: PaymentClient,
        user: User,
        subscription: PlanSubscription,
    ) -> SalesActivityResponse:
        """구독 정보로 판매 활동을 생성합니다.

        Create a sale activity from a subscription and its plan.
        Charge fields come from the subscription; the plan name is looked
        up by id; invoice_id is set when a matching invoice is found.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            payment: 결제 클라이언트 (Payment client)
            user: 구독 사용자 (Subscribing user)
            subscription: 요금제 구독 (Plan subscription with plan_group loaded)

        Returns:
            SalesActivityResponse: 생성된 판매 활동 (Created sale activity)
        """
        activity: ParkingSaleActivity = ParkingSaleActivity()
        activity.invoice_id = await self._find_invoice_id(payment, user, subscription)

        plan: ParkingPlan | None = await parking_plan_repository.get_one_parking_plan_by_id(db, subscription.plan_id)
        self._copy_user(activity, user)
        activity.plan_id = subscription.plan_id
        activity.plan_name = plan.plan_name if plan is not None else None
        activity.lot_id = plan.lot_id if plan is not None else None
        activity.plan_subscription_date = subscription.plan_start_date
        activity.plan_expiry_date = subscription.plan_expiry_date
        self._split_charge(activity, subscription.plan_charge_amount)
        activity.pp_id = subscription.payment_profile_id

        activity = await sales_activity_repository.save(db, activity)
        return self.construct_dto(activity)

    async def create_sale_activity_for_plan_user(
        self,
        db: AsyncSession,
        user: User,
        plan: ParkingPlan,
    ) -> SalesActivityResponse:
        """요금제 사용자의 입차 판매 기록을 생성합니다 (청구액 0).

        Create a zero-charge sale record for a plan holder entering a lot:
        entry time is now and the status is Parked.
        """
        activity: ParkingSaleActivity = ParkingSaleActivity()
        self._copy_user(activity, user)
        activity.plan_id = plan.id
        activity.plan_name = plan.plan_name
        activity.lot_id = plan.lot_id
        self._split_charge(activity, 0.0)
        activity.entry_datetime = datetime.now(timezone.utc)
        activity.parking_status = ParkingStatus.PARKED

        activity = await sales_activity_repository.save(db, activity)
        return self.construct_dto(activity)

    async def find_all_activity_between(
        self,
        db: AsyncSession,
        start_time: datetime,
        end_time: datetime,
    ) -> list[ParkingSaleActivity]:
        return await sales_activity_repository.get_parking_sale_activity_between(db, start_time, end_time)

    async def find_in_flight_activity_by_user(
        self,
        db: AsyncSession,
        user: User,
    ) -> list[ParkingSaleActivity]:
        """입차 후 아직 출차하지 않은 판매 활동 목록."""
        activities = await sales_activity_repository.get_parking_sale_activities_by_user(db, user)
        return [a for a in activities if _is_in_flight(a)]

    async def close_in_flight_activities(
        self,
        db: AsyncSession,
        user: User,
        lot_id: int,
        exit_time: datetime,
    ) -> int:
        """해당 주차장의 진행 중 판매 활동을 출차 처리합니다.

        Mark the user's in-flight sale activities at a lot as exited.

        Returns:
            int: 처리된 활동 수 (Number of activities closed)
        """
        closed: int = 0
        for activity in await self.find_in_flight_activity_by_user(db, user):
            if activity.lot_id != lot_id:
                continue
            activity.exit_datetime = exit_time
            activity.parking_status = ParkingStatus.EXITED
            closed += 1
        await db.flush()
        return closed

    def filter(
        self,
        activities: Iterable[ParkingSaleActivity],
        sale: bool,
        record: bool,
        in_flight: bool,
    ) -> list[ParkingSaleActivity]:
        """세 가지 플래그로 판매 활동을 선별합니다.

        Select activities by three flags. in_flight takes precedence and
        ignores the other two. Non-matching entries are skipped; the scan
        never stops early, so input order does not matter.

            in_flight        -> entry set and exit not set
            sale and record  -> entry set and charge set
            sale only        -> charge > 0
            record only      -> entry set
            none             -> everything

        Args:
            activities: 판매 활동 목록 (Sale activities)
            sale: 과금 건만 (Only charged activities)
            record: 입차 기록이 있는 건만 (Only activities with an entry)
            in_flight: 진행 중인 건만 (Only in-flight activities)

        Returns:
            list[ParkingSaleActivity]: 선별된 목록, 입력 순서 유지 (Selected, input order kept)
        """
        if in_flight:
            return [a for a in activities if _is_in_flight(a)]
        if sale and record:
            return [a for a in activities if a.entry_datetime is not None and a.charge_amount is not None]
        if sale:
            return [a for a in activities if (a.charge_amount or 0) > 0]
        if record:
            return [a for a in activities if a.entry_datetime is not None]
        return list(activities)

    async def get_filtered_for_user(
        self,
        db: AsyncSession,
        user: User,
        sale: bool = False,
        record: bool = False,
        in_flight: bool = False,
    ) -> list[SalesActivityResponse]:
        """사용자의 판매 활동을 필터링하여 반환합니다."""
        activities = await sales_activity_repository.get_parking_sale_activities_by_user(db, user)
        return [self.construct_dto(a) for a in self.filter(activities, sale, record, in_flight)]

    def construct_dto(self, activity: ParkingSaleActivity) -> SalesActivityResponse:
        """판매 활동 모델을 응답 스키마로 변환합니다."""
        return SalesActivityResponse(
            id=str(activity.id),
            lot_id=activity.lot_id,
            user_id=str(activity.user_id),
            user_email=activity.user_email,
            plan_id=str(activity.plan_id) if activity.plan_id is not None else None,
            plan_name=activity.plan_name,
            plan_subscription_date=activity.plan_subscription_date,
            plan_expiry_date=activity.plan_expiry_date,
            charge_amount=activity.charge_amount,
            service_amount=activity.service_amount,
            net_amount=activity.net_amount,
            pp_id=activity.pp_id,
            entry_datetime=activity.entry_datetime,
            exit_datetime=activity.exit_datetime,
            parking_status=activity.parking_status,
            exception_flag=activity.exception_flag,
            invoice_id=activity.invoice_id,
        )


# 싱글턴 인스턴스 — Singleton instance
sales_activity_service: SalesActivityService = SalesActivityService()
