"""판매 활동 레포지토리 — parking_sale_activities 쿼리.

Sales Activity Repository — Queries for parking_sale_activities.
"""

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.parking import ParkingSaleActivity
from app.models.user import User
from app.repositories.base import BaseRepository


class SalesActivityRepository(BaseRepository[ParkingSaleActivity]):
    """판매 활동 레포지토리."""

    def __init__(self) -> None:
        super().__init__(ParkingSaleActivity)

    async def get_parking_sale_activity_between(
        self,
        db: AsyncSession,
        start_time: datetime,
        end_time: datetime,
    ) -> list[ParkingSaleActivity]:
        """기간 내 생성된 판매 활동을 조회합니다 (경계 미포함).

        Sale activities created strictly between the bounds.
        """
        result = await db.execute(
            select(ParkingSaleActivity)
            .where(ParkingSaleActivity.created_at > start_time, ParkingSaleActivity.created_at < end_time)
            .order_by(ParkingSaleActivity.created_at)
        )
        return list(result.scalars().all())

    async def get_parking_sale_activities_by_user(
        self,
        db: AsyncSession,
        activity_holder: User,
    ) -> list[ParkingSaleActivity]:
        """사용자의 판매 활동을 생성순으로 조회합니다."""
        result = await db.execute(
            select(ParkingSaleActivity)
            .where(ParkingSaleActivity.user_id == activity_holder.id)
            .order_by(ParkingSaleActivity.created_at)
        )
        return list(result.scalars().all())


# 싱글턴 인스턴스 — Singleton instance
sales_activity_repository: SalesActivityRepository = SalesActivityRepository()
