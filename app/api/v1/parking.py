"""주차 활동 라우터 — 이력 조회, 입차, 출차, 상태 변경.

Parking Router — History, entry, exit and admin status changes.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user, require_admin
from app.database import get_db
from app.models.parking import ParkingActivity
from app.models.user import User
from app.schemas.parking import (
    ParkingActivityResponse,
    ParkingEntryRequest,
    ParkingExitRequest,
    ParkingStatusUpdate,
)
from app.services.parking_activity_service import parking_activity_service
from app.utils.pagination import Page

router: APIRouter = APIRouter()


@router.get("/activities", response_model=Page)
async def list_my_activities(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    page: int = Query(1, ge=1),
    per_page: int = Query(20, ge=1, le=100),
) -> Page:
    """내 주차 이력을 최신순으로 페이지 조회합니다."""
    return await parking_activity_service.get_activities_for_user(db, current_user, page, per_page)


@router.post("/entry", response_model=ParkingActivityResponse, status_code=201)
async def record_entry(
    data: ParkingEntryRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ParkingActivityResponse:
    """입차를 기록합니다."""
    activity: ParkingActivity = await parking_activity_service.record_entry(db, current_user, data.lot_id)
    await db.commit()
    return parking_activity_service.to_response(activity)


@router.post("/{activity_id}/exit", response_model=ParkingActivityResponse)
async def record_exit(
    activity_id: UUID,
    data: ParkingExitRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ParkingActivityResponse:
    """출차를 기록합니다.

    Record the exit of one of the current user's activities.

    Args:
        activity_id: 주차 활동 UUID (Parking activity UUID)
        data: 출차 시각과 게이트 응답 (Exit time and gate response, both optional)
    """
    activity: ParkingActivity = await parking_activity_service.record_exit(
        db, activity_id, current_user, data.exit_datetime, data.gate_response
    )
    await db.commit()
    return parking_activity_service.to_response(activity)


@router.put("/{activity_id}/status", response_model=ParkingActivityResponse)
async def change_status(
    activity_id: UUID,
    data: ParkingStatusUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> ParkingActivityResponse:
    """주차 상태를 직접 변경합니다 (ROLE_ADMIN)."""
    activity: ParkingActivity = await parking_activity_service.change_status(
        db, activity_id, data.parking_status, data.exception_flag
    )
    await db.commit()
    return parking_activity_service.to_response(activity)
