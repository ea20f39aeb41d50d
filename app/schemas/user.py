"""계정 관련 Pydantic 요청/응답 스키마 정의.

Account Pydantic request/response schema definitions.
Covers registration, account read/update, password change and
client log upload.
"""

from pydantic import BaseModel, Field

from app.schemas.parking import ParkingActivityResponse


class CreateUserRequest(BaseModel):
    """회원가입 요청 스키마.

    Registration request schema. The e-mail becomes the login and is
    matched against plan eligibility rows.

    Attributes:
        email: 로그인 이메일 (Login e-mail)
        password: 비밀번호 5~50자, 서비스에서 검사 (5 to 50 characters, checked by the service)
        first_name / last_name: 이름 (Name parts)
        mobile_number: 휴대폰 번호, 전역 고유 (Mobile number, globally unique)
        license_plate: 차량 번호판 (License plate)
        region: 지역 (Region)
        card_token: 결제 카드 토큰 (Card token, used only when payment is enabled)
    """

    email: str = Field(..., min_length=3, max_length=100)
    password: str
    first_name: str | None = None
    last_name: str | None = None
    mobile_number: str = Field(..., min_length=1, max_length=20)
    license_plate: str | None = None
    region: str | None = None
    card_token: str | None = None


class UpdateAccountRequest(BaseModel):
    """계정 정보 수정 요청 스키마 — 이름과 지역만 수정 가능."""

    first_name: str | None = None
    last_name: str | None = None
    region: str | None = None


class PasswordUpdateRequest(BaseModel):
    """비밀번호 변경 요청 스키마.

    Length is validated in the router so failures use the coded 400 body.
    """

    password: str | None = None


class LogRequest(BaseModel):
    """클라이언트 로그 업로드 요청 스키마.

    Attributes:
        log_event: 클라이언트 로그 라인 목록, 마지막 40개만 저장
                   (Client log lines; only the trailing 40 are stored)
    """

    log_event: list[str] | None = None


class UserResponse(BaseModel):
    """계정 응답 스키마 (GET /account).

    Attributes:
        roles: 권한 이름 목록 (Authority names)
        parking_status: 최근 주차 활동, 없으면 null (Latest parking activity or null)
    """

    id: str
    login: str
    first_name: str | None
    last_name: str | None
    mobile_number: str
    license_plate: str | None
    region: str | None
    activated: bool
    roles: list[str] = []
    parking_status: ParkingActivityResponse | None = None
