"""사용자 서비스 — 계정 조회/수정, 비밀번호 변경, 응답 변환.

User Service — Account read/update, password change and DTO building.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.parking import ParkingActivity
from app.models.user import User
from app.repositories.parking_activity_repository import parking_activity_repository
from app.repositories.user_repository import user_repository
from app.schemas.user import UpdateAccountRequest, UserResponse
from app.services.parking_activity_service import parking_activity_service
from app.utils.exceptions import NotFoundError
from app.utils.password import hash_password

logger = logging.getLogger(__name__)


class UserService:
    """계정 관련 비즈니스 로직을 처리하는 서비스."""

    def to_response(self, user: User, latest: ParkingActivity | None = None) -> UserResponse:
        """사용자 모델을 계정 응답으로 변환합니다.

        Convert a User to the account DTO, attaching the latest parking
        activity when one is given.
        """
        return UserResponse(
            id=str(user.id),
            login=user.login,
            first_name=user.first_name,
            last_name=user.last_name,
            mobile_number=user.mobile_number,
            license_plate=user.license_plate,
            region=user.region,
            activated=user.activated,
            roles=user.authority_names,
            parking_status=parking_activity_service.to_response(latest) if latest is not None else None,
        )

    async def get_user(self, db: AsyncSession, email: str) -> User:
        """로그인 이메일로 사용자를 조회합니다.

        Raises:
            NotFoundError: 사용자가 없을 때 (User not found)
        """
        user: User | None = await user_repository.find_one_by_login(db, email)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def get_account(self, db: AsyncSession, user: User) -> UserResponse:
        """현재 사용자 계정과 최근 주차 활동을 반환합니다.

        Return the current account with its latest parking activity attached.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user: 인증된 사용자 (Authenticated user)

        Returns:
            UserResponse: 계정 응답 (Account response)
        """
        latest: ParkingActivity | None = await parking_activity_repository.get_latest_activity_for_user(db, user)
        if latest is None:
            logger.warning("Unable to find latest parking activity for user with login = %s", user.login)
        return self.to_response(user, latest)

    async def update_user_information(
        self,
        db: AsyncSession,
        user: User,
        data: UpdateAccountRequest,
    ) -> User:
        """이름과 지역을 수정합니다. 요청 값이 그대로 반영됩니다.

        Overwrite first name, last name and region with the request values.
        """
        user.first_name = data.first_name
        user.last_name = data.last_name
        user.region = data.region
        await db.flush()
        logger.debug("Changed information for user: %s", user.login)
        return user

    async def change_password(self, db: AsyncSession, user: User, password: str) -> None:
        """비밀번호를 새 해시로 교체합니다. 길이 검사는 호출자가 수행."""
        user.password_hash = hash_password(password)
        await db.flush()
        logger.debug("Changed password for user: %s", user.login)


# 싱글턴 인스턴스 — Singleton instance
user_service: UserService = UserService()
