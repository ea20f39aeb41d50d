"""요금제 레포지토리 — 요금제, 요금제 자격, 구독 쿼리.

Plan Repository — Parking plans, plan eligibility and subscriptions.
"""

from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.parking import ParkingPlan, PlanEligibleUser, PlanSubscription
from app.repositories.base import BaseRepository


class ParkingPlanRepository(BaseRepository[ParkingPlan]):
    """parking_plans 테이블 쿼리 레포지토리."""

    def __init__(self) -> None:
        super().__init__(ParkingPlan)

    async def get_one_parking_plan_by_id(
        self,
        db: AsyncSession,
        plan_id: UUID,
    ) -> ParkingPlan | None:
        """ID로 요금제를 조회합니다."""
        return await self.get_by_id(db, plan_id)

    async def get_plans_by_lot_id(
        self,
        db: AsyncSession,
        lot_id: int,
    ) -> list[ParkingPlan]:
        """주차장에 속한 요금제 목록을 조회합니다."""
        result = await db.execute(
            select(ParkingPlan)
            .where(ParkingPlan.lot_id == lot_id)
            .order_by(ParkingPlan.plan_name)
        )
        return list(result.scalars().all())


class PlanEligibleUserRepository(BaseRepository[PlanEligibleUser]):
    """plan_eligible_users 테이블 쿼리 레포지토리.

    Repository for e-mail to plan eligibility rows.
    """

    def __init__(self) -> None:
        super().__init__(PlanEligibleUser)

    async def get_eligible_users_by_user_email(
        self,
        db: AsyncSession,
        user_email: str,
    ) -> list[PlanEligibleUser]:
        """이메일에 해당하는 요금제 자격 목록을 조회합니다.

        Retrieve every eligibility row for an e-mail, plan eagerly loaded.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_email: 사용자 이메일 (User e-mail)

        Returns:
            list[PlanEligibleUser]: 자격 목록 (Eligibility rows)
        """
        query: Select = (
            select(PlanEligibleUser)
            .where(PlanEligibleUser.user_email == user_email)
            .order_by(PlanEligibleUser.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def find_one_by_user_email_and_plan(
        self,
        db: AsyncSession,
        user_email: str,
        plan_id: UUID,
    ) -> PlanEligibleUser | None:
        """이메일과 요금제로 자격 레코드 하나를 조회합니다."""
        result = await db.execute(
            select(PlanEligibleUser)
            .where(PlanEligibleUser.user_email == user_email, PlanEligibleUser.plan_id == plan_id)
            .limit(1)
        )
        return result.scalar_one_or_none()


class PlanSubscriptionRepository(BaseRepository[PlanSubscription]):
    """plan_subscriptions 테이블 쿼리 레포지토리."""

    def __init__(self) -> None:
        super().__init__(PlanSubscription)

    async def get_by_user(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> list[PlanSubscription]:
        """사용자의 구독 목록을 조회합니다."""
        result = await db.execute(
            select(PlanSubscription)
            .where(PlanSubscription.user_id == user_id)
            .order_by(PlanSubscription.plan_start_date)
        )
        return list(result.scalars().all())


# 싱글턴 인스턴스 — Singleton instances
parking_plan_repository: ParkingPlanRepository = ParkingPlanRepository()
plan_eligible_user_repository: PlanEligibleUserRepository = PlanEligibleUserRepository()
plan_subscription_repository: PlanSubscriptionRepository = PlanSubscriptionRepository()
