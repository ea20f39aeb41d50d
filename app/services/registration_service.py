"""회원가입 서비스 — 중복 검사, 요금제 자격 확인, 결제 등록, 무료 요금제 자동 구독.

Registration Service — Duplicate checks, plan eligibility, optional payment
provider registration and automatic subscription to free plans.

Check order (first failure wins, nothing is written before step 5):
    0. password not 5 to 50 chars   -> GENERIC
    1. login already used           -> REGISTER_USERNAME_TAKEN
    2. mobile number already used   -> REGISTER_PHONENUM_TAKEN
    3. no eligible plan for e-mail  -> REGISTER_PLAN_NOTFOUND
    4. payment enabled and provider registration fails -> REGISTER_STRIPE_FAILED
    5. create user, auto-subscribe every zero-charge plan
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.parking import PlanEligibleUser
from app.models.user import Authority, AuthorityName, User
from app.repositories.user_repository import user_repository
from app.schemas.parking import ParkingPlanResponse
from app.schemas.user import CreateUserRequest
from app.services.config_service import config_service
from app.services.payment_service import PaymentClient
from app.services.plan_service import plan_service
from app.services.subscription_service import subscription_service
from app.utils.exceptions import ErrorCode, GenericBadRequestError, PaymentError
from app.utils.password import hash_password, is_valid_password_length

logger = logging.getLogger(__name__)

REGISTER_PATH: str = "/register"

USERNAME_TAKEN: str = "username is already in use!"
PHONE_NUM_TAKEN: str = "mobile phone number is already in use!"
STRIPE_FAILED: str = "register with stripe failed!"
PLAN_NOT_FOUND: str = "Unable to find suitable plan."
INVALID_PASSWORD: str = "Password must be between 5 and 50 characters"


class RegistrationService:
    """회원가입 비즈니스 로직을 처리하는 서비스."""

    async def payment_register(
        self,
        payment: PaymentClient,
        data: CreateUserRequest,
    ) -> str | None:
        """결제 제공자에 고객을 등록하고 고객 토큰을 반환합니다. 실패 시 None."""
        try:
            return await payment.create_customer(data.email, data.card_token)
        except PaymentError as exc:
            logger.warning("Payment registration failed for %s: %s", data.email, exc)
            return None

    async def create_user(
        self,
        db: AsyncSession,
        data: CreateUserRequest,
        stripe_token: str | None,
    ) -> User:
        """ROLE_USER 권한의 활성 사용자를 생성합니다."""
        authority: Authority = await user_repository.get_authority(db, AuthorityName.USER)
        user: User = User(
            login=data.email,
            password_hash=hash_password(data.password),
            first_name=data.first_name,
            last_name=data.last_name,
            mobile_number=data.mobile_number,
            license_plate=data.license_plate,
            region=data.region,
            stripe_token=stripe_token,
            activated=True,
        )
        user.authorities = [authority]
        try:
            user = await user_repository.save(db, user)
        except IntegrityError as exc:
            # 동시 가입이 조회를 통과한 경우 — a concurrent registration won the unique constraint
            await db.rollback()
            if "mobile_number" in str(exc.orig):
                raise GenericBadRequestError(
                    PHONE_NUM_TAKEN, REGISTER_PATH, ErrorCode.REGISTER_PHONENUM_TAKEN
                ) from exc
            raise GenericBadRequestError(
                USERNAME_TAKEN, REGISTER_PATH, ErrorCode.REGISTER_USERNAME_TAKEN
            ) from exc
        logger.debug("Created information for user: %s", user.login)
        return user

    async def register(
        self,
        db: AsyncSession,
        payment: PaymentClient,
        data: CreateUserRequest,
    ) -> ParkingPlanResponse | list[ParkingPlanResponse]:
        """회원가입을 처리하고 구독 가능한 요금제를 반환합니다.

        Register the user and return the plans they may subscribe to.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            payment: 결제 클라이언트 (Payment client)
            data: 회원가입 요청 (Registration request)

        Returns:
            자격 레코드가 정확히 1개면 단일 요금제, 아니면 요금제 목록
            (A single plan when exactly one eligibility row exists, else a list)

        Raises:
            GenericBadRequestError: 검사 실패 시 코드가 포함된 400
                                    (Coded 400 on any failed check)
        """
        if not is_valid_password_length(data.password):
            raise GenericBadRequestError(INVALID_PASSWORD, REGISTER_PATH, ErrorCode.GENERIC)
        if await user_repository.find_one_by_login(db, data.email) is not None:
            raise GenericBadRequestError(USERNAME_TAKEN, REGISTER_PATH, ErrorCode.REGISTER_USERNAME_TAKEN)
        if await user_repository.find_one_by_mobile_number(db, data.mobile_number) is not None:
            raise GenericBadRequestError(PHONE_NUM_TAKEN, REGISTER_PATH, ErrorCode.REGISTER_PHONENUM_TAKEN)

        eligible: list[PlanEligibleUser] = await plan_service.get_plans_by_user_email(db, data.email)
        if not eligible:
            raise GenericBadRequestError(PLAN_NOT_FOUND, REGISTER_PATH, ErrorCode.REGISTER_PLAN_NOTFOUND)

        stripe_token: str | None = None
        if await config_service.is_payment_enabled(db):
            logger.info("Payment provider is enabled. Adding payment info during registration flow.")
            stripe_token = await self.payment_register(payment, data)
            if stripe_token is None:
                raise GenericBadRequestError(STRIPE_FAILED, REGISTER_PATH, ErrorCode.REGISTER_STRIPE_FAILED)
        else:
            logger.info("Payment provider is disabled. Skipping payment info during registration flow.")

        user: User = await self.create_user(db, data, stripe_token)

        plans: list[ParkingPlanResponse] = []
        for row in eligible:
            plan = row.plan_group
            if plan is None:
                continue
            free: bool = plan.unit_charge_amount == 0
            if free:
                await subscription_service.auto_subscribe(db, user, plan.id)
            plans.append(plan_service.create_parking_plan_information(plan, subscribed=free))

        if len(eligible) == 1 and plans:
            return plans[0]
        return plans


# 싱글턴 인스턴스 — Singleton instance
registration_service: RegistrationService = RegistrationService()
