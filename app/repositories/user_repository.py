"""사용자 레포지토리 — 로그인/휴대폰 번호 조회 및 권한 쿼리.

User Repository — Lookup by login or mobile number and authority queries.
"""

from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.user import Authority, User
from app.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """사용자 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the users table.
    """

    def __init__(self) -> None:
        super().__init__(User)

    async def find_one_by_login(
        self,
        db: AsyncSession,
        login: str,
    ) -> User | None:
        """로그인(이메일)으로 사용자를 조회합니다.

        Retrieve a user by login e-mail.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            login: 로그인 이메일 (Login e-mail)

        Returns:
            User | None: 조회된 사용자 또는 None (Found user or None)
        """
        query: Select = (
            select(User)
            .options(selectinload(User.authorities))
            .where(User.login == login)
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def find_one_by_mobile_number(
        self,
        db: AsyncSession,
        mobile_number: str,
    ) -> User | None:
        """휴대폰 번호로 사용자를 조회합니다.

        Retrieve a user by mobile number.
        """
        result = await db.execute(
            select(User).where(User.mobile_number == mobile_number)
        )
        return result.scalar_one_or_none()

    async def get_with_authorities(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> User | None:
        """권한을 함께 로드하여 사용자를 조회합니다."""
        query: Select = (
            select(User)
            .options(selectinload(User.authorities))
            .where(User.id == user_id)
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def get_authority(
        self,
        db: AsyncSession,
        name: str,
    ) -> Authority:
        """권한을 조회하고 없으면 생성합니다.

        Fetch an authority by name, creating it when missing.
        """
        authority: Authority | None = await db.get(Authority, name)
        if authority is None:
            authority = Authority(name=name)
            db.add(authority)
            await db.flush()
        return authority


# 싱글턴 인스턴스 — Singleton instance
user_repository: UserRepository = UserRepository()
