"""리프레시 토큰 모델 — 운전자 앱 세션의 1회용 리프레시 토큰.

Refresh token rows backing driver app sessions. Login replaces every row
the user holds; /authenticate/refresh deletes the presented row and stores
the rotated one; /logout deletes it. A token missing from this table is
rejected even when its JWT signature is still valid.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class RefreshToken(Base):
    """발급된 리프레시 토큰 — Issued refresh token, single use.

    Attributes:
        user_id: 토큰 소유 운전자/관리자 (Owning user, rows cascade on user delete)
        token: 서명된 JWT, jti 클레임으로 고유 (Signed JWT, unique through its jti claim)
        expires_at: 만료 시각, 갱신 시 UTC로 비교 (Expiry, compared in UTC on refresh)
    """

    __tablename__ = "refresh_tokens"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    token: Mapped[str] = mapped_column(String(512), unique=True, nullable=False)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    issued_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    user = relationship("User", back_populates="refresh_tokens")
