"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package registers every model with the metadata,
which relationship resolution and create_all rely on.

Modules:
    user: 사용자 및 권한 (Users and authorities)
    token: 리프레시 토큰 (Refresh tokens)
    parking: 요금제, 자격, 구독, 주차/판매 활동 (Plans, eligibility, subscriptions, activities)
    exception_log: 클라이언트 예외 로그, 런타임 설정 (Client exception logs, runtime config)
"""

from app.models.user import Authority, AuthorityName, User, user_authorities
from app.models.token import RefreshToken
from app.models.parking import (
    ParkingActivity,
    ParkingPlan,
    ParkingSaleActivity,
    ParkingStatus,
    PlanEligibleUser,
    PlanSubscription,
)
from app.models.exception_log import AppConfig, ExceptionLog

__all__ = [
    "Authority", "AuthorityName", "User", "user_authorities",
    "RefreshToken",
    "ParkingActivity", "ParkingPlan", "ParkingSaleActivity", "ParkingStatus",
    "PlanEligibleUser", "PlanSubscription",
    "AppConfig", "ExceptionLog",
]
