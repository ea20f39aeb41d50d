"""런타임 설정 서비스 — app_configs 값을 타입 변환하여 제공.

Config Service — Typed reads of runtime settings stored in app_configs.
"""

from typing import Any, Callable, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.repositories.exception_log_repository import app_config_repository

T = TypeVar("T")

_TRUE_VALUES: frozenset[str] = frozenset({"true", "1", "yes", "on"})


class AppConfigKey:
    """런타임 설정 키 — Runtime configuration keys."""

    PAYMENT_ENABLED: str = "PAYMENT_ENABLED"


def _to_bool(raw: str) -> bool:
    return raw.strip().lower() in _TRUE_VALUES


_CASTERS: dict[type, Callable[[str], Any]] = {
    bool: _to_bool,
    int: lambda raw: int(raw.strip()),
    float: lambda raw: float(raw.strip()),
    str: lambda raw: raw,
}


class ConfigService:
    """런타임 설정 조회 서비스."""

    async def get(
        self,
        db: AsyncSession,
        key: str,
        cast: type[T],
        default: T,
    ) -> T:
        """설정 값을 조회하여 변환합니다. 없거나 변환 불가 시 기본값.

        Read a setting and cast it; missing or unparsable values yield the default.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            key: 설정 키 (Setting key)
            cast: 변환 타입 — bool, int, float, str (Target type)
            default: 기본값 (Fallback value)

        Returns:
            T: 변환된 값 (Cast value)
        """
        raw: str | None = await app_config_repository.get_value(db, key)
        if raw is None:
            return default
        caster: Callable[[str], Any] | None = _CASTERS.get(cast)
        if caster is None:
            raise TypeError(f"Unsupported config type: {cast!r}")
        try:
            return caster(raw)
        except ValueError:
            return default

    async def set(self, db: AsyncSession, key: str, value: Any) -> None:
        """설정 값을 문자열로 저장합니다."""
        raw: str = str(value).lower() if isinstance(value, bool) else str(value)
        await app_config_repository.set_value(db, key, raw)

    async def is_payment_enabled(self, db: AsyncSession) -> bool:
        """결제 연동 활성 여부 — Whether the payment provider is enabled."""
        return await self.get(db, AppConfigKey.PAYMENT_ENABLED, bool, settings.PAYMENT_ENABLED)


# 싱글턴 인스턴스 — Singleton instance
config_service: ConfigService = ConfigService()
