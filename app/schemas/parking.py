"""요금제, 주차 활동, 판매 활동 Pydantic 스키마 정의.

Parking plan, parking activity and sale activity Pydantic schemas.
"""

from datetime import datetime

from pydantic import BaseModel


class ParkingPlanResponse(BaseModel):
    """요금제 정보 응답 스키마 — 회원가입 및 요금제 목록 응답에 사용.

    Attributes:
        plan_id: 요금제 UUID (Plan identifier)
        plan_name: 요금제 이름 (Plan name)
        lot_id: 주차장 ID (Lot identifier)
        plan_charge_amount: 청구 금액 (Charge amount, 0 = free)
        subscribed: 구독 여부 (Whether the caller is subscribed)
    """

    plan_id: str
    plan_name: str
    lot_id: int
    plan_charge_amount: float
    description: str | None = None
    subscribed: bool = False


class SubscribeResponse(BaseModel):
    """요금제 구독 결과 — 구독 ID 또는 실패 사유 문자열."""

    result: str


class ParkingActivityResponse(BaseModel):
    """주차 활동 응답 스키마."""

    id: str
    lot_id: int
    parking_status: str
    entry_datetime: datetime
    exit_datetime: datetime | None = None
    exception_flag: str | None = None
    gate_response: str | None = None


class ParkingEntryRequest(BaseModel):
    """입차 요청 스키마."""

    lot_id: int


class ParkingExitRequest(BaseModel):
    """출차 요청 스키마 — exit_datetime 생략 시 현재 시각."""

    exit_datetime: datetime | None = None
    gate_response: str | None = None


class ParkingStatusUpdate(BaseModel):
    """주차 상태 변경 요청 스키마 (관리자용).

    Attributes:
        parking_status: 새 상태 문자열 (New status string)
        exception_flag: 예외 사유 (Optional exception note)
    """

    parking_status: str
    exception_flag: str | None = None


class SalesActivityResponse(BaseModel):
    """판매 활동 응답 스키마."""

    id: str
    lot_id: int | None
    user_id: str
    user_email: str | None
    plan_id: str | None
    plan_name: str | None
    plan_subscription_date: datetime | None
    plan_expiry_date: datetime | None
    charge_amount: float | None
    service_amount: float | None
    net_amount: float | None
    pp_id: str | None
    entry_datetime: datetime | None
    exit_datetime: datetime | None
    parking_status: str | None
    exception_flag: str | None
    invoice_id: str | None
