"""클라이언트 예외 로그 및 런타임 설정 레포지토리.

Exception Log and App Config repositories.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.exception_log import AppConfig, ExceptionLog
from app.repositories.base import BaseRepository


class ExceptionLogRepository(BaseRepository[ExceptionLog]):
    """exception_logs 테이블 레포지토리."""

    def __init__(self) -> None:
        super().__init__(ExceptionLog)


class AppConfigRepository:
    """app_configs 키/값 레포지토리.

    Key/value repository; keys are primary keys so lookups use Session.get.
    """

    async def get_value(self, db: AsyncSession, key: str) -> str | None:
        """키에 해당하는 원시 문자열 값을 반환합니다."""
        config: AppConfig | None = await db.get(AppConfig, key)
        return config.value if config is not None else None

    async def set_value(self, db: AsyncSession, key: str, value: str) -> AppConfig:
        """값을 저장합니다 (없으면 생성). Upsert a value."""
        config: AppConfig | None = await db.get(AppConfig, key)
        if config is None:
            config = AppConfig(key=key, value=value)
            db.add(config)
        else:
            config.value = value
        await db.flush()
        return config


# 싱글턴 인스턴스 — Singleton instances
exception_log_repository: ExceptionLogRepository = ExceptionLogRepository()
app_config_repository: AppConfigRepository = AppConfigRepository()
