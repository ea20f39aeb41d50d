"""판매 활동 라우터 — 현재 사용자의 판매 이력 필터 조회.

Sales Router — Filtered sale history of the current user.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.database import get_db
from app.models.user import User
from app.schemas.parking import SalesActivityResponse
from app.services.sales_activity_service import sales_activity_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[SalesActivityResponse])
async def list_sales(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    sale: bool = Query(False),
    record: bool = Query(False),
    in_flight: bool = Query(False),
) -> list[SalesActivityResponse]:
    """판매 활동을 필터링하여 조회합니다.

    Args:
        sale: 과금 건만 (Only charged activities)
        record: 입차 기록이 있는 건만 (Only activities with an entry)
        in_flight: 진행 중인 건만, 다른 필터보다 우선 (Only in-flight; overrides the others)
    """
    return await sales_activity_service.get_filtered_for_user(
        db, current_user, sale=sale, record=record, in_flight=in_flight
    )
