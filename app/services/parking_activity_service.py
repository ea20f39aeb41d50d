"""주차 활동 서비스 — 입차, 출차, 상태 변경, 이력 조회.

Parking Activity Service — Entry, exit, status changes and history.
Status strings are written as-is; no transition is rejected.
"""

import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.parking import ParkingActivity, ParkingStatus
from app.models.user import User
from app.repositories.parking_activity_repository import parking_activity_repository
from app.repositories.plan_repository import plan_subscription_repository
from app.schemas.parking import ParkingActivityResponse
from app.services.sales_activity_service import sales_activity_service
from app.utils.exceptions import BadRequestError, NotFoundError
from app.utils.pagination import Page

logger = logging.getLogger(__name__)


class ParkingActivityService:
    """주차 활동 비즈니스 로직을 처리하는 서비스."""

    def to_response(self, activity: ParkingActivity) -> ParkingActivityResponse:
        """주차 활동 모델을 응답 스키마로 변환합니다."""
        return ParkingActivityResponse(
            id=str(activity.id),
            lot_id=activity.lot_id,
            parking_status=activity.parking_status,
            entry_datetime=activity.created_at,
            exit_datetime=activity.exit_datetime,
            exception_flag=activity.exception_flag,
            gate_response=activity.gate_response,
        )

    async def _get_or_404(self, db: AsyncSession, activity_id: UUID) -> ParkingActivity:
        activity: ParkingActivity | None = await parking_activity_repository.get_parking_activity_by_id(db, activity_id)
        if activity is None:
            raise NotFoundError("Parking activity not found")
        return activity

    async def get_latest_activity_for_user(
        self,
        db: AsyncSession,
        user: User,
    ) -> ParkingActivity | None:
        """사용자의 가장 최근 주차 활동을 반환합니다."""
        return await parking_activity_repository.get_latest_activity_for_user(db, user)

    async def get_activities_for_user(
        self,
        db: AsyncSession,
        user: User,
        page: int = 1,
        per_page: int = 20,
    ) -> Page:
        """사용자의 주차 이력을 최신순으로 페이지 조회합니다."""
        items, total = await parking_activity_repository.find_by_activity_holder(db, user, page, per_page)
        return Page.build(
            items=[self.to_response(a) for a in items],
            total=total,
            page=page,
            per_page=per_page,
        )

    async def record_entry(
        self,
        db: AsyncSession,
        user: User,
        lot_id: int,
    ) -> ParkingActivity:
        """입차를 기록합니다 — Parked 상태의 새 활동 생성.

        Record a vehicle entry as a new Parked activity. When the user holds
        a subscription to a plan of this lot, a zero-charge sale record is
        opened as well.
        """
        activity: ParkingActivity = await parking_activity_repository.create(db, {
            "user_id": user.id,
            "lot_id": lot_id,
            "parking_status": ParkingStatus.PARKED,
        })
        logger.info("User %s entered lot %s (activity %s)", user.login, lot_id, activity.id)

        for subscription in await plan_subscription_repository.get_by_user(db, user.id):
            if subscription.plan_group is not None and subscription.plan_group.lot_id == lot_id:
                await sales_activity_service.create_sale_activity_for_plan_user(db, user, subscription.plan_group)
                break
        return activity

    async def record_exit(
        self,
        db: AsyncSession,
        activity_id: UUID,
        user: User,
        exit_time: datetime | None = None,
        gate_response: str | None = None,
    ) -> ParkingActivity:
        """출차를 기록합니다 — 출차 시각 저장 후 Exited 상태로 변경.

        Record a vehicle exit: set the exit time (now when omitted), store the
        gate response when given and set the status to Exited.

        Raises:
            NotFoundError: 활동이 없거나 다른 사용자의 활동일 때
                           (Activity missing or owned by another user)
            BadRequestError: 이미 출차된 활동일 때 (Activity already exited)
        """
        activity: ParkingActivity = await self._get_or_404(db, activity_id)
        if activity.user_id != user.id:
            raise NotFoundError("Parking activity not found")
        if activity.exit_datetime is not None:
            raise BadRequestError("Parking activity already exited")

        exited_at: datetime = exit_time or datetime.now(timezone.utc)
        await parking_activity_repository.set_exit_time(db, exited_at, activity_id)
        if gate_response is not None:
            await parking_activity_repository.set_gate_response(db, gate_response, activity_id)
        await parking_activity_repository.set_parking_status_by_id(db, ParkingStatus.EXITED, activity_id)
        await sales_activity_service.close_in_flight_activities(db, user, activity.lot_id, exited_at)
        await db.refresh(activity)
        return activity

    async def change_status(
        self,
        db: AsyncSession,
        activity_id: UUID,
        parking_status: str,
        exception_flag: str | None = None,
    ) -> ParkingActivity:
        """상태를 직접 변경합니다 (관리자용). 예외 플래그도 함께 기록 가능.

        Set the status directly, optionally recording an exception flag.
        """
        activity: ParkingActivity = await self._get_or_404(db, activity_id)
        await parking_activity_repository.set_parking_status_by_id(db, parking_status, activity_id)
        if exception_flag is not None:
            await self.flag_exception(db, activity_id, exception_flag)
        await db.refresh(activity)
        return activity

    async def set_gate_response(
        self,
        db: AsyncSession,
        activity_id: UUID,
        gate_response: str,
    ) -> None:
        """게이트 응답 텍스트를 저장합니다."""
        await self._get_or_404(db, activity_id)
        await parking_activity_repository.set_gate_response(db, gate_response, activity_id)

    async def flag_exception(
        self,
        db: AsyncSession,
        activity_id: UUID,
        exception_flag: str,
    ) -> None:
        """예외 플래그를 기록합니다."""
        logger.warning("Parking activity %s flagged: %s", activity_id, exception_flag)
        await parking_activity_repository.set_exception_flag(db, exception_flag, activity_id)


# 싱글턴 인스턴스 — Singleton instance
parking_activity_service: ParkingActivityService = ParkingActivityService()
