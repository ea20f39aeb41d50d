"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Provides pre-configured HTTPException subclasses for common error patterns,
plus the coded 400 error body returned by the registration and account APIs.

Usage:
    from app.utils.exceptions import NotFoundError, GenericBadRequestError, ErrorCode
    raise NotFoundError("Parking plan not found")
    raise GenericBadRequestError("username is already in use!", "/register", ErrorCode.REGISTER_USERNAME_TAKEN)
"""

from fastapi import HTTPException, status


class ErrorCode:
    """클라이언트가 분기하는 고정 오류 코드.

    Fixed error codes the mobile client branches on.
    """

    GENERIC: int = -1
    REGISTER_USERNAME_TAKEN: int = 1001
    REGISTER_PHONENUM_TAKEN: int = 1002
    REGISTER_PLAN_NOTFOUND: int = 1003
    REGISTER_STRIPE_FAILED: int = 1004


class NotFoundError(HTTPException):
    """404 Not Found 예외 — 요청한 리소스를 찾을 수 없을 때 사용.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource not found")
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ForbiddenError(HTTPException):
    """403 Forbidden 예외 — 권한 부족 시 사용.

    Raised when the authenticated user lacks a required authority
    (e.g. ROLE_USER account calling an admin-only endpoint).
    """

    def __init__(self, detail: str = "Insufficient permissions") -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class UnauthorizedError(HTTPException):
    """401 Unauthorized 예외 — 인증 실패 시 사용."""

    def __init__(self, detail: str = "Authentication required") -> None:
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class BadRequestError(HTTPException):
    """400 Bad Request 예외 — 잘못된 요청 데이터 시 사용.

    Raised when the request data is invalid beyond what Pydantic validation catches.
    """

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class GenericBadRequestError(HTTPException):
    """코드가 포함된 400 응답 — Coded 400 response.

    Response body (rendered by the handler in app.main):
        {"message": ..., "path": ..., "code": ...}

    Args:
        message: 사용자 표시 메시지 (Human readable message)
        path: 실패한 요청 경로 (Request path that failed)
        code: ErrorCode 값 (One of the ErrorCode values)
    """

    def __init__(self, message: str, path: str, code: int = ErrorCode.GENERIC) -> None:
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": message, "path": path, "code": code},
        )
        self.message: str = message
        self.path: str = path
        self.code: int = code


class PaymentError(Exception):
    """결제 제공자 호출 실패 — Payment provider call failed.

    Raised by the payment client for any provider-side failure
    (authentication, connection, card, invalid request, API errors).
    Services decide how to surface it.
    """
