"""클라이언트 예외 로그 서비스.

Exception Log Service — Stores the tail of a client's log events.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.exception_log import ExceptionLog
from app.models.user import User
from app.repositories.exception_log_repository import exception_log_repository


def join_log_tail(events: list[str] | None, tail: int) -> str | None:
    """마지막 tail개 이벤트를 각각 줄바꿈으로 끝나도록 이어 붙입니다.

    Join the last `tail` events, each followed by a newline.
    None stays None.
    """
    if events is None:
        return None
    return "".join(f"{event}\n" for event in events[max(0, len(events) - tail):])


class ExceptionLogService:
    """클라이언트 예외 로그 저장 서비스."""

    async def save_exception_log(
        self,
        db: AsyncSession,
        user: User,
        events: list[str] | None,
    ) -> ExceptionLog:
        """현재 사용자의 로그 이벤트를 저장합니다."""
        return await exception_log_repository.create(db, {
            "user_id": user.id,
            "log_message": join_log_tail(events, settings.LOG_EVENT_TAIL),
        })


# 싱글턴 인스턴스 — Singleton instance
exception_log_service: ExceptionLogService = ExceptionLogService()
