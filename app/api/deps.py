"""FastAPI 의존성 주입 모듈 — 인증 및 권한 검사.

FastAPI dependency injection module — Authentication and authorization.

Authentication Flow:
    1. 클라이언트가 Authorization: Bearer <token> 헤더를 전송
       (Client sends Authorization: Bearer <token> header)
    2. decode_token()이 JWT를 검증하고 페이로드를 반환
       (decode_token verifies JWT and returns payload)
    3. 페이로드의 "sub" 필드로 DB에서 사용자를 조회
       (User is fetched from DB using payload "sub" field)
    4. 사용자 활성 상태를 확인 (User activated flag is verified)

Authorization Flow (require_role):
    사용자의 권한 목록에 요구 권한이 없으면 403 Forbidden
    (Returns 403 when the user does not hold the required authority)
"""

from typing import Annotated, Awaitable, Callable
from uuid import UUID

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models.user import AuthorityName, User
from app.repositories.user_repository import user_repository
from app.utils.exceptions import ForbiddenError
from app.utils.jwt import decode_token

# HTTP Bearer 토큰 추출기 — Extracts JWT token from Authorization header
# auto_error=False: 헤더 누락 시 403 대신 401 반환 (Missing header yields 401, not 403)
security: HTTPBearer = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """JWT 토큰에서 현재 인증된 사용자를 추출합니다.

    Decode JWT from the Authorization header and return the authenticated user.

    Raises:
        HTTPException(401): 토큰 누락/무효/만료 또는 사용자 없음/비활성
                            (Missing, invalid or expired token; user missing or inactive)
    """
    if credentials is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")
    try:
        payload: dict = decode_token(credentials.credentials)
        # 토큰 타입 검증 — Reject refresh tokens used as access tokens
        if payload.get("type") != "access":
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token type")
        user_id: str | None = payload.get("sub")
        if user_id is None:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
        parsed_id: UUID = UUID(user_id)
    except HTTPException:
        raise
    except (jwt.InvalidTokenError, KeyError, ValueError):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token")

    user: User | None = await user_repository.get_with_authorities(db, parsed_id)
    if user is None or not user.activated:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found or inactive")

    return user


def require_role(authority: str) -> Callable[..., Awaitable[User]]:
    """권한 기반 접근 검사 의존성 팩토리.

    Dependency factory enforcing that the current user holds `authority`.
    ROLE_ADMIN passes every check.

    Args:
        authority: 요구 권한 이름 (Required authority name)

    Returns:
        FastAPI 의존성 함수 — 인증된 사용자 반환 또는 403 발생
    """
    async def _check(
        current_user: Annotated[User, Depends(get_current_user)],
    ) -> User:
        held: list[str] = current_user.authority_names
        if authority not in held and AuthorityName.ADMIN not in held:
            raise ForbiddenError()
        return current_user
    return _check


# 편의 의존성 — Pre-configured authority dependencies
require_user = require_role(AuthorityName.USER)
require_admin = require_role(AuthorityName.ADMIN)
