"""요금제 서비스 — 요금제 정보 응답과 이메일별 자격 조회.

Plan Service — Plan DTOs and eligibility lookup by e-mail.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.parking import ParkingPlan, PlanEligibleUser
from app.models.user import User
from app.repositories.plan_repository import plan_eligible_user_repository
from app.schemas.parking import ParkingPlanResponse


class PlanService:
    """요금제 관련 비즈니스 로직을 처리하는 서비스."""

    def create_parking_plan_information(
        self,
        plan: ParkingPlan,
        subscribed: bool = False,
    ) -> ParkingPlanResponse:
        """요금제 모델을 응답 스키마로 변환합니다."""
        return ParkingPlanResponse(
            plan_id=str(plan.id),
            plan_name=plan.plan_name,
            lot_id=plan.lot_id,
            plan_charge_amount=plan.unit_charge_amount,
            description=plan.description,
            subscribed=subscribed,
        )

    async def get_plans_by_user_email(
        self,
        db: AsyncSession,
        user_email: str,
    ) -> list[PlanEligibleUser]:
        """이메일에 해당하는 요금제 자격 레코드 목록."""
        return await plan_eligible_user_repository.get_eligible_users_by_user_email(db, user_email)

    async def list_eligible_plans(
        self,
        db: AsyncSession,
        user: User,
    ) -> list[ParkingPlanResponse]:
        """현재 사용자가 구독할 수 있는 요금제 목록을 반환합니다.

        Return the plans the user is eligible for, with their subscribed flag.
        Eligibility rows without a plan are skipped.
        """
        eligible: list[PlanEligibleUser] = await self.get_plans_by_user_email(db, user.login)
        return [
            self.create_parking_plan_information(row.plan_group, row.subscribed)
            for row in eligible
            if row.plan_group is not None
        ]


# 싱글턴 인스턴스 — Singleton instance
plan_service: PlanService = PlanService()
