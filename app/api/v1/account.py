"""계정 라우터 — 회원가입, 계정 조회/수정, 비밀번호 변경, 클라이언트 로그.

Account Router — Registration, account read/update, password change and
client log upload.
Follows 3-layer architecture: Router → Service → Repository.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user, require_user
from app.database import get_db
from app.models.user import User
from app.schemas.parking import ParkingPlanResponse
from app.schemas.user import (
    CreateUserRequest,
    LogRequest,
    PasswordUpdateRequest,
    UpdateAccountRequest,
    UserResponse,
)
from app.services.exception_log_service import exception_log_service
from app.services.payment_service import PaymentClient, get_payment_client
from app.services.registration_service import registration_service
from app.services.user_service import user_service
from app.utils.exceptions import ErrorCode, GenericBadRequestError
from app.utils.password import is_valid_password_length

logger = logging.getLogger(__name__)

router: APIRouter = APIRouter()

CHANGE_PASSWORD_PATH: str = "api/account/change_password"
LOG_MESSAGE_PATH: str = "/logMessage"


@router.post("/register", response_model=ParkingPlanResponse | list[ParkingPlanResponse])
async def register_account(
    data: CreateUserRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    payment: Annotated[PaymentClient, Depends(get_payment_client)],
) -> ParkingPlanResponse | list[ParkingPlanResponse]:
    """회원가입 — 사용자 생성 후 구독 가능한 요금제 반환.

    Register a new user and return the plans they are eligible for.

    Args:
        data: 회원가입 요청 (Registration request)
        db: 비동기 데이터베이스 세션 (Async database session)
        payment: 결제 클라이언트 (Payment client)

    Returns:
        단일 요금제 또는 요금제 목록 (A single plan or a list of plans)
    """
    result = await registration_service.register(db, payment, data)
    await db.commit()
    return result


@router.get("/account", response_model=UserResponse)
async def get_account(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> UserResponse:
    """현재 사용자 계정과 최근 주차 상태를 조회합니다."""
    return await user_service.get_account(db, current_user)


@router.post("/account", status_code=200)
async def save_account(
    data: UpdateAccountRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_user)],
) -> None:
    """이름과 지역을 수정합니다 (ROLE_USER)."""
    await user_service.update_user_information(db, current_user, data)
    await db.commit()


@router.post("/account/change_password", status_code=200)
async def change_password(
    data: PasswordUpdateRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> None:
    """비밀번호를 변경합니다.

    Raises:
        GenericBadRequestError: 비밀번호가 비었거나 5~50자가 아닐 때
                                (Password empty or not 5 to 50 characters)
    """
    if not is_valid_password_length(data.password):
        raise GenericBadRequestError(
            "Password must be between 5 and 50 characters",
            CHANGE_PASSWORD_PATH,
            ErrorCode.GENERIC,
        )
    await user_service.change_password(db, current_user, data.password)
    await db.commit()


@router.post("/logMessage", status_code=200)
async def save_log_message(
    data: LogRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> None:
    """클라이언트 로그의 마지막 이벤트들을 예외 로그로 저장합니다.

    Store the trailing client log events as an exception log entry.

    Raises:
        GenericBadRequestError: 저장 실패 시 (Saving failed)
    """
    try:
        await exception_log_service.save_exception_log(db, current_user, data.log_event)
        await db.commit()
    except SQLAlchemyError as exc:
        logger.error("Failed to save log message for %s: %s", current_user.login, exc)
        await db.rollback()
        raise GenericBadRequestError("Failed to save log message", LOG_MESSAGE_PATH, ErrorCode.GENERIC)
