"""클라이언트 예외 로그 및 런타임 설정 모델.

Client exception log and runtime configuration models.

Tables:
    - exception_logs: 모바일 클라이언트가 올린 로그 묶음 (Log blobs uploaded by the client)
    - app_configs: 키/값 런타임 설정 (Key/value runtime settings)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class ExceptionLog(Base):
    """클라이언트 예외 로그 — 사용자별 자유 형식 텍스트."""

    __tablename__ = "exception_logs"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=True)
    log_message: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    activity_holder = relationship("User")


class AppConfig(Base):
    """런타임 설정 — 값은 문자열로 저장하고 읽을 때 변환.

    Runtime setting; values are stored as strings and cast on read.
    """

    __tablename__ = "app_configs"

    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    value: Mapped[str] = mapped_column(String(255), nullable=False)
