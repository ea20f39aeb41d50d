"""초기 데이터 시드 스크립트 — 권한, 관리자 계정, 요금제, 설정 생성.

Seed script — Creates authorities, the admin user, plans and config rows.
Run this script once to bootstrap the database with required initial data.

Usage:
    python -m app.seed

Creates:
    - 2개 권한: ROLE_USER, ROLE_ADMIN (2 authorities)
    - 1개 관리자 계정: admin@parking.local / admin123 (1 admin user)
    - 2개 요금제: 무료(lot 1), 유료(lot 2) (A free and a paid plan)
    - 관리자 이메일의 요금제 자격 (Eligibility rows for the admin e-mail)
    - PAYMENT_ENABLED 설정 (Payment flag config row)
"""

import asyncio

from sqlalchemy import select

from app.config import settings
from app.database import async_session, engine, Base
from app.models import AppConfig, Authority, AuthorityName, ParkingPlan, PlanEligibleUser, User
from app.services.config_service import AppConfigKey
from app.utils.password import hash_password

ADMIN_LOGIN: str = "admin@parking.local"


async def seed() -> None:
    """데이터베이스를 초기 데이터로 시드합니다.

    Seed the database with initial data.
    Creates tables if they don't exist, then inserts authorities, the
    admin user, one free and one paid plan, and the payment flag.

    Idempotent: 이미 시드된 경우 건너뜁니다 (Skips if already seeded).
    """
    # 테이블 생성 — DDL 실행 (Create all tables from ORM metadata)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as db:
        # 권한이 하나라도 있으면 이미 시드된 것으로 간주
        # (Check if already seeded by looking for any existing authority)
        result = await db.execute(select(Authority).limit(1))
        if result.scalar_one_or_none():
            print("Already seeded. Skipping.")
            return

        user_role: Authority = Authority(name=AuthorityName.USER)
        admin_role: Authority = Authority(name=AuthorityName.ADMIN)
        db.add_all([user_role, admin_role])

        admin: User = User(
            login=ADMIN_LOGIN,
            password_hash=hash_password("admin123"),
            first_name="System",
            last_name="Admin",
            mobile_number="0000000000",
            activated=True,
        )
        admin.authorities = [user_role, admin_role]
        db.add(admin)

        free_plan: ParkingPlan = ParkingPlan(
            plan_name="Resident", lot_id=1, unit_charge_amount=0.0,
            description="Free parking for residents",
        )
        paid_plan: ParkingPlan = ParkingPlan(
            plan_name="Monthly", lot_id=2, unit_charge_amount=50.0,
            payment_plan_id="price_monthly",
            description="Monthly visitor parking",
        )
        db.add_all([free_plan, paid_plan])
        await db.flush()  # flush로 plan.id 생성 (Flush to generate plan ids)

        db.add_all([
            PlanEligibleUser(user_email=ADMIN_LOGIN, plan_id=free_plan.id),
            PlanEligibleUser(user_email=ADMIN_LOGIN, plan_id=paid_plan.id),
        ])
        db.add(AppConfig(
            key=AppConfigKey.PAYMENT_ENABLED,
            value=str(settings.PAYMENT_ENABLED).lower(),
        ))

        await db.commit()
        print(f"Seeded: admin user={ADMIN_LOGIN}/admin123, plans={free_plan.id},{paid_plan.id}")


if __name__ == "__main__":
    asyncio.run(seed())
