"""주차 요금제, 자격, 구독, 주차 활동 관련 SQLAlchemy ORM 모델 정의.

Parking plan, eligibility, subscription and activity ORM model definitions.

Tables:
    - parking_plans: 주차장별 요금제 (Subscribable pricing plans per lot)
    - plan_eligible_users: 이메일-요금제 자격 매핑 (E-mail to eligible plan mapping)
    - plan_subscriptions: 사용자 요금제 구독 (User plan subscriptions)
    - parking_activities: 입출차 세션 (Vehicle parking sessions)
    - parking_sale_activities: 과금 정보가 포함된 세션 (Sessions with billing fields)
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ParkingStatus:
    """주차 상태 문자열 — 전이 규칙 없음 (No transition rules are enforced).

    Known parking status strings.
    """

    PARKED: str = "Parked"
    EXITED: str = "Exited"
    PENDING: str = "Pending"
    EXCEPTION: str = "Exception"

    ALL: tuple[str, ...] = (PARKED, EXITED, PENDING, EXCEPTION)


class ParkingPlan(Base):
    """요금제 모델 — 특정 주차장에 연결된 구독형 요금제.

    Subscribable pricing plan attached to a lot.

    Attributes:
        plan_name: 요금제 이름 (Plan display name)
        lot_id: 주차장 식별자 (Lot identifier)
        unit_charge_amount: 청구 금액, 0이면 무료 (Charge per period, 0 means free)
        payment_plan_id: 결제 제공자 가격 ID (Provider price/plan id)
    """

    __tablename__ = "parking_plans"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    plan_name: Mapped[str] = mapped_column(String(100), nullable=False)
    lot_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    unit_charge_amount: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    payment_plan_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)


class PlanEligibleUser(Base):
    """요금제 자격 모델 — 이메일 주소가 구독할 수 있는 요금제.

    Eligibility of an e-mail address for a plan, with a subscribed flag.
    Rows are created by operators before the user registers.
    """

    __tablename__ = "plan_eligible_users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_email: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    plan_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("parking_plans.id", ondelete="CASCADE"), nullable=True)
    subscribed: Mapped[bool] = mapped_column(Boolean, default=False)

    plan_group = relationship("ParkingPlan", lazy="selectin")


class PlanSubscription(Base):
    """요금제 구독 모델.

    Attributes:
        stripe_id: 결제 제공자 구독 ID (Provider subscription id, NULL for free plans)
        plan_charge_amount: 구독 시점 청구 금액 (Charge captured at subscription time)
        payment_profile_id: 사용된 결제 프로필 참조 (Payment profile reference)
    """

    __tablename__ = "plan_subscriptions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    plan_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("parking_plans.id", ondelete="CASCADE"), nullable=False)
    stripe_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    plan_start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    plan_expiry_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    plan_charge_amount: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    payment_profile_id: Mapped[str | None] = mapped_column(String(255), nullable=True)

    plan_group = relationship("ParkingPlan", lazy="selectin")
    user = relationship("User", lazy="selectin")


class ParkingActivity(Base):
    """주차 활동 모델 — 한 번의 입차~출차 세션.

    One parking session: entry creates the row, exit and gate callbacks
    mutate it in place.
    """

    __tablename__ = "parking_activities"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    lot_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    parking_status: Mapped[str] = mapped_column(String(30), nullable=False, default=ParkingStatus.PARKED)
    # 입차 시각 — Entry time (생성 시각과 동일, same as row creation)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, index=True)
    exit_datetime: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    exception_flag: Mapped[str | None] = mapped_column(String(255), nullable=True)
    gate_response: Mapped[str | None] = mapped_column(Text, nullable=True)

    activity_holder = relationship("User", lazy="selectin")


class ParkingSaleActivity(Base):
    """판매 활동 모델 — 과금 필드가 추가된 주차 활동.

    Parking activity extended with charge/service/net amounts and the
    provider invoice it was billed on.
    """

    __tablename__ = "parking_sale_activities"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    lot_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    plan_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    plan_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    # 기록 시점의 사용자 정보 스냅샷 — User details copied at creation time
    user_email: Mapped[str | None] = mapped_column(String(100), nullable=True)
    user_phone_number: Mapped[str | None] = mapped_column(String(20), nullable=True)
    user_license_plate: Mapped[str | None] = mapped_column(String(20), nullable=True)
    plan_subscription_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    plan_expiry_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    charge_amount: Mapped[float | None] = mapped_column(Float, nullable=True)
    service_amount: Mapped[float | None] = mapped_column(Float, nullable=True)
    net_amount: Mapped[float | None] = mapped_column(Float, nullable=True)
    pp_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    entry_datetime: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    exit_datetime: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    parking_status: Mapped[str | None] = mapped_column(String(30), nullable=True)
    exception_flag: Mapped[str | None] = mapped_column(String(255), nullable=True)
    invoice_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, index=True)

    activity_holder = relationship("User", lazy="selectin")
