"""사용자 및 권한 관련 SQLAlchemy ORM 모델 정의.

User and Authority SQLAlchemy ORM model definitions.

Tables:
    - authorities: 권한 이름 (Authority names, e.g. ROLE_USER / ROLE_ADMIN)
    - user_authorities: 사용자-권한 매핑 (User to authority association)
    - users: 운전자 계정 (Driver accounts, login = email)
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, Table, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class AuthorityName:
    """권한 이름 상수 — Authority name constants."""

    USER: str = "ROLE_USER"
    ADMIN: str = "ROLE_ADMIN"


# 사용자-권한 연결 테이블 — User/authority association table
user_authorities: Table = Table(
    "user_authorities",
    Base.metadata,
    Column("user_id", Uuid, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("authority_name", String(50), ForeignKey("authorities.name"), primary_key=True),
)


class Authority(Base):
    """권한 모델 — 이름 자체가 기본키.

    Authority model; the name is the primary key.
    """

    __tablename__ = "authorities"

    name: Mapped[str] = mapped_column(String(50), primary_key=True)


class User(Base):
    """사용자 모델 — 주차 서비스 이용자 계정.

    User model — Parking customer account.
    Login is the e-mail address; both login and mobile number are unique.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        login: 로그인 이메일 (Login e-mail, unique)
        password_hash: bcrypt 해시된 비밀번호 (bcrypt-hashed password)
        first_name / last_name: 이름 (Name parts)
        mobile_number: 휴대폰 번호 (Mobile number, unique)
        license_plate: 차량 번호판 (Vehicle license plate)
        stripe_token: 결제 제공자 고객 토큰 (Payment provider customer token, nullable)
        region: 지역 (Region)
        activated: 활성 상태 (Active status)
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 로그인 이메일 — Login e-mail (전역 고유, globally unique)
    login: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    first_name: Mapped[str | None] = mapped_column(String(50), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(50), nullable=True)
    # 휴대폰 번호 — Mobile number (가입 시 중복 검사, duplicate-checked at registration)
    mobile_number: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    license_plate: Mapped[str | None] = mapped_column(String(20), nullable=True)
    # 결제 제공자 고객 ID — Provider customer id (결제 비활성 시 NULL)
    stripe_token: Mapped[str | None] = mapped_column(String(255), nullable=True)
    region: Mapped[str | None] = mapped_column(String(100), nullable=True)
    activated: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # 관계 — Relationships
    authorities = relationship("Authority", secondary=user_authorities, lazy="selectin")
    refresh_tokens = relationship("RefreshToken", back_populates="user", cascade="all, delete-orphan")

    @property
    def authority_names(self) -> list[str]:
        """권한 이름 목록 — Authority names held by the user."""
        return [authority.name for authority in self.authorities]
