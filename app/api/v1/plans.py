"""요금제 라우터 — 구독 가능한 요금제 조회와 구독.

Plan Router — Eligible plan listing and subscription.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.database import get_db
from app.models.user import User
from app.schemas.parking import ParkingPlanResponse, SubscribeResponse
from app.services.payment_service import PaymentClient, get_payment_client
from app.services.plan_service import plan_service
from app.services.subscription_service import subscription_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[ParkingPlanResponse])
async def list_plans(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> list[ParkingPlanResponse]:
    """현재 사용자가 구독할 수 있는 요금제 목록."""
    return await plan_service.list_eligible_plans(db, current_user)


@router.post("/{plan_id}/subscribe", response_model=SubscribeResponse)
async def subscribe_plan(
    plan_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    payment: Annotated[PaymentClient, Depends(get_payment_client)],
) -> SubscribeResponse:
    """요금제를 구독합니다.

    Subscribe the current user to a plan. The result is the provider
    subscription id on success, otherwise a failure reason string.

    Args:
        plan_id: 요금제 UUID (Plan UUID)
        db: 비동기 데이터베이스 세션 (Async database session)
        current_user: 인증된 사용자 (Authenticated user)
        payment: 결제 클라이언트 (Payment client)

    Returns:
        SubscribeResponse: 구독 결과 (Subscription result)
    """
    result: str = await subscription_service.subscribe_plan(db, payment, current_user.login, plan_id)
    await db.commit()
    return SubscribeResponse(result=result)
