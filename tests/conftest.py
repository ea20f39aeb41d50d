"""테스트 인프라 — 인메모리 SQLite DB, 세션, httpx 클라이언트, 가짜 결제 클라이언트.

Test infrastructure — In-memory SQLite DB, session, httpx client and a fake
payment client.
Every test gets a fresh database; the schema is created from ORM metadata.
"""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.main import app
from app.models import *  # noqa: F401,F403 — register all models with metadata
from app.models.parking import ParkingPlan, PlanEligibleUser
from app.models.user import Authority, AuthorityName, User
from app.services.payment_service import InvoiceSummary, get_payment_client
from app.utils.exceptions import PaymentError
from app.utils.jwt import create_access_token
from app.utils.password import hash_password

TEST_DATABASE_URL = "sqlite+aiosqlite://"


# ---------------------------------------------------------------------------
# 가짜 결제 클라이언트 — Fake payment provider
# ---------------------------------------------------------------------------
class FakePaymentClient:
    """호출을 기록하고 실패를 주입할 수 있는 결제 클라이언트.

    Records calls and lets a test make any operation fail.
    """

    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self.fail: set[str] = set()
        self.invoices: list[InvoiceSummary] = []
        self.subscription_id: str = "sub_123"

    def _check(self, name: str) -> None:
        if name in self.fail:
            raise PaymentError(f"{name} failed")

    async def create_customer(self, email: str, card_token: str | None) -> str:
        self.calls.append(("create_customer", email, card_token))
        self._check("create_customer")
        return f"cus_{email.split('@')[0]}"

    async def retrieve_customer(self, customer_id: str) -> str:
        self.calls.append(("retrieve_customer", customer_id))
        self._check("retrieve_customer")
        return customer_id

    async def create_subscription(self, customer_id: str, plan_ref: str) -> str:
        self.calls.append(("create_subscription", customer_id, plan_ref))
        self._check("create_subscription")
        return self.subscription_id

    async def list_invoices(self, customer_id: str, limit: int) -> list[InvoiceSummary]:
        self.calls.append(("list_invoices", customer_id, limit))
        self._check("list_invoices")
        return self.invoices[:limit]

    def called(self, name: str) -> bool:
        return any(call[0] == name for call in self.calls)


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진. 테스트마다 새 인메모리 스키마를 생성합니다."""
    eng = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest.fixture
def payment() -> FakePaymentClient:
    return FakePaymentClient()


@pytest_asyncio.fixture
async def client(db: AsyncSession, payment: FakePaymentClient) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션과 결제 클라이언트를 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_payment_client] = lambda: payment

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def authorities(db: AsyncSession) -> dict[str, Authority]:
    """ROLE_USER, ROLE_ADMIN 권한을 생성합니다."""
    result = {}
    for name in (AuthorityName.USER, AuthorityName.ADMIN):
        authority = Authority(name=name)
        db.add(authority)
        result[name] = authority
    await db.flush()
    return result


async def make_user(
    db: AsyncSession,
    authorities: list[Authority],
    login: str,
    mobile_number: str,
    password: str = "secret123",
    stripe_token: str | None = None,
) -> User:
    user = User(
        login=login,
        password_hash=hash_password(password),
        first_name="Test",
        last_name="Driver",
        mobile_number=mobile_number,
        license_plate="ABC123",
        region="Central",
        stripe_token=stripe_token,
        activated=True,
    )
    user.authorities = authorities
    db.add(user)
    await db.flush()
    await db.refresh(user)
    return user


@pytest_asyncio.fixture
async def driver(db: AsyncSession, authorities) -> User:
    """ROLE_USER 운전자를 생성합니다 (결제 고객 토큰 보유)."""
    return await make_user(
        db, [authorities[AuthorityName.USER]], "driver@example.com", "5550001", stripe_token="cus_driver"
    )


@pytest_asyncio.fixture
async def admin_user(db: AsyncSession, authorities) -> User:
    """ROLE_USER + ROLE_ADMIN 관리자를 생성합니다."""
    return await make_user(
        db,
        [authorities[AuthorityName.USER], authorities[AuthorityName.ADMIN]],
        "admin@example.com",
        "5550999",
    )


async def make_plan(
    db: AsyncSession,
    name: str,
    lot_id: int,
    charge: float,
    payment_plan_id: str | None = None,
) -> ParkingPlan:
    plan = ParkingPlan(
        plan_name=name, lot_id=lot_id, unit_charge_amount=charge, payment_plan_id=payment_plan_id
    )
    db.add(plan)
    await db.flush()
    await db.refresh(plan)
    return plan


@pytest_asyncio.fixture
async def free_plan(db: AsyncSession) -> ParkingPlan:
    return await make_plan(db, "Resident", 1, 0.0)


@pytest_asyncio.fixture
async def paid_plan(db: AsyncSession) -> ParkingPlan:
    return await make_plan(db, "Monthly", 2, 50.0, payment_plan_id="price_monthly")


async def make_eligibility(
    db: AsyncSession,
    email: str,
    plan: ParkingPlan | None,
    subscribed: bool = False,
) -> PlanEligibleUser:
    row = PlanEligibleUser(
        user_email=email, plan_id=plan.id if plan is not None else None, subscribed=subscribed
    )
    db.add(row)
    await db.flush()
    await db.refresh(row)
    return row


def make_token(user: User) -> str:
    """테스트용 JWT 액세스 토큰을 생성합니다."""
    return create_access_token({
        "sub": str(user.id),
        "login": user.login,
        "auth": user.authority_names,
    })


@pytest.fixture
def driver_token(driver) -> str:
    return make_token(driver)


@pytest.fixture
def admin_token(admin_user) -> str:
    return make_token(admin_user)


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
