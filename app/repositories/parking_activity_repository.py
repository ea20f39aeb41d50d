"""주차 활동 레포지토리 — 기간/상태/사용자/주차장별 조회와 필드 단위 업데이트.

Parking Activity Repository — Queries by time range, status, holder and lot,
plus single-column updates used by the gate and exit flows.
"""

from datetime import datetime
from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.parking import ParkingActivity
from app.models.user import User
from app.repositories.base import BaseRepository


class ParkingActivityRepository(BaseRepository[ParkingActivity]):
    """parking_activities 테이블 쿼리 레포지토리.

    Repository handling database queries for the parking_activities table.
    Time ranges are exclusive on both ends (created_at > start and < end).
    """

    def __init__(self) -> None:
        super().__init__(ParkingActivity)

    async def get_parking_activity_by_id(
        self,
        db: AsyncSession,
        activity_id: UUID,
    ) -> ParkingActivity | None:
        """ID로 주차 활동을 조회합니다."""
        return await self.get_by_id(db, activity_id)

    async def get_parking_activity_between(
        self,
        db: AsyncSession,
        start_time: datetime,
        end_time: datetime,
    ) -> list[ParkingActivity]:
        """기간 내 생성된 주차 활동 목록을 조회합니다.

        Retrieve activities created strictly between start_time and end_time.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            start_time: 시작 시각, 미포함 (Exclusive lower bound)
            end_time: 종료 시각, 미포함 (Exclusive upper bound)

        Returns:
            list[ParkingActivity]: 주차 활동 목록 (Matching activities)
        """
        query: Select = (
            select(ParkingActivity)
            .where(ParkingActivity.created_at > start_time, ParkingActivity.created_at < end_time)
            .order_by(ParkingActivity.created_at)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def find_all_by_status(
        self,
        db: AsyncSession,
        status: str,
    ) -> list[ParkingActivity]:
        """상태 문자열로 주차 활동 목록을 조회합니다."""
        result = await db.execute(
            select(ParkingActivity)
            .where(ParkingActivity.parking_status == status)
            .order_by(ParkingActivity.created_at)
        )
        return list(result.scalars().all())

    async def get_parking_activity_between_for_user(
        self,
        db: AsyncSession,
        start_time: datetime,
        end_time: datetime,
        activity_holder: User,
    ) -> list[ParkingActivity]:
        """특정 사용자의 기간 내 주차 활동 목록을 조회합니다.

        Retrieve one user's activities created strictly between the bounds.
        """
        query: Select = (
            select(ParkingActivity)
            .where(
                ParkingActivity.created_at > start_time,
                ParkingActivity.created_at < end_time,
                ParkingActivity.user_id == activity_holder.id,
            )
            .order_by(ParkingActivity.created_at)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def get_parking_activities_by_user(
        self,
        db: AsyncSession,
        activity_holder: User,
    ) -> list[ParkingActivity]:
        """사용자의 모든 주차 활동을 조회합니다."""
        result = await db.execute(
            select(ParkingActivity)
            .where(ParkingActivity.user_id == activity_holder.id)
            .order_by(ParkingActivity.created_at)
        )
        return list(result.scalars().all())

    async def get_parking_activity_by_user_and_status(
        self,
        db: AsyncSession,
        user: User,
        status: str,
    ) -> ParkingActivity | None:
        """사용자와 상태로 가장 최근 주차 활동 하나를 조회합니다.

        Retrieve the most recent activity of a user in the given status.
        """
        result = await db.execute(
            select(ParkingActivity)
            .where(ParkingActivity.user_id == user.id, ParkingActivity.parking_status == status)
            .order_by(ParkingActivity.created_at.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def get_parking_activities_by_lot_id(
        self,
        db: AsyncSession,
        lot_id: int,
    ) -> list[ParkingActivity]:
        """주차장 ID로 주차 활동 목록을 조회합니다."""
        result = await db.execute(
            select(ParkingActivity)
            .where(ParkingActivity.lot_id == lot_id)
            .order_by(ParkingActivity.created_at)
        )
        return list(result.scalars().all())

    async def find_by_activity_holder(
        self,
        db: AsyncSession,
        user: User,
        page: int = 1,
        per_page: int = 20,
    ) -> tuple[Sequence[ParkingActivity], int]:
        """사용자의 주차 활동을 최신순으로 페이지 조회합니다.

        Paginated activities of a user, newest first.
        """
        query: Select = (
            select(ParkingActivity)
            .where(ParkingActivity.user_id == user.id)
            .order_by(ParkingActivity.created_at.desc())
        )
        return await self.get_paginated(db, query, page, per_page)

    async def get_latest_activity_for_user(
        self,
        db: AsyncSession,
        user: User,
    ) -> ParkingActivity | None:
        """사용자의 가장 최근 주차 활동을 조회합니다."""
        result = await db.execute(
            select(ParkingActivity)
            .where(ParkingActivity.user_id == user.id)
            .order_by(ParkingActivity.created_at.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def get_parking_activity_by_type_between(
        self,
        db: AsyncSession,
        start_time: datetime,
        end_time: datetime,
        status: str,
    ) -> list[ParkingActivity]:
        """기간 내 특정 상태의 주차 활동 목록을 조회합니다."""
        query: Select = (
            select(ParkingActivity)
            .where(
                ParkingActivity.created_at > start_time,
                ParkingActivity.created_at < end_time,
                ParkingActivity.parking_status == status,
            )
            .order_by(ParkingActivity.created_at)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def _set_column(
        self,
        db: AsyncSession,
        activity_id: UUID,
        values: dict,
    ) -> None:
        # 세션에 로드된 인스턴스를 갱신 — db.get returns the identity-map instance when loaded
        activity: ParkingActivity | None = await db.get(ParkingActivity, activity_id)
        if activity is None:
            return
        for column, value in values.items():
            setattr(activity, column, value)
        await db.flush()

    async def set_parking_status_by_id(
        self,
        db: AsyncSession,
        parking_status: str,
        activity_id: UUID,
    ) -> None:
        """주차 상태를 변경합니다. 전이 유효성은 검사하지 않습니다.

        Set the status string; transitions are not validated.
        """
        await self._set_column(db, activity_id, {"parking_status": parking_status})

    async def set_gate_response(
        self,
        db: AsyncSession,
        gate_response: str,
        activity_id: UUID,
    ) -> None:
        """게이트 응답 텍스트를 저장합니다."""
        await self._set_column(db, activity_id, {"gate_response": gate_response})

    async def set_exit_time(
        self,
        db: AsyncSession,
        exit_time: datetime,
        activity_id: UUID,
    ) -> None:
        """출차 시각을 저장합니다."""
        await self._set_column(db, activity_id, {"exit_datetime": exit_time})

    async def set_exception_flag(
        self,
        db: AsyncSession,
        exception_flag: str,
        activity_id: UUID,
    ) -> None:
        """예외 플래그를 저장합니다."""
        await self._set_column(db, activity_id, {"exception_flag": exception_flag})


# 싱글턴 인스턴스 — Singleton instance
parking_activity_repository: ParkingActivityRepository = ParkingActivityRepository()
