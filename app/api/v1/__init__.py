"""v1 API 라우터 패키지 — 모든 엔드포인트 통합.

v1 API Router package — Aggregates every endpoint into a single router
for inclusion in the FastAPI application under /api/v1.

Included routers:
    - auth: 로그인, 토큰 갱신, 로그아웃 (Login, refresh, logout)
    - account: 회원가입, 계정, 비밀번호, 클라이언트 로그
      (Registration, account, password, client log)
    - plans: 요금제 조회 및 구독 (Plan listing and subscription)
    - sales: 판매 이력 (Sale history)
    - parking: 주차 활동 (Parking activity)
"""

from fastapi import APIRouter

from app.api.v1.account import router as account_router
from app.api.v1.auth import router as auth_router
from app.api.v1.parking import router as parking_router
from app.api.v1.plans import router as plans_router
from app.api.v1.sales import router as sales_router

api_router: APIRouter = APIRouter()

api_router.include_router(auth_router, tags=["Auth"])
# 계정: /register, /account, /account/change_password, /logMessage
api_router.include_router(account_router, tags=["Account"])
api_router.include_router(plans_router, prefix="/plans", tags=["Plans"])
api_router.include_router(sales_router, prefix="/sales", tags=["Sales"])
api_router.include_router(parking_router, prefix="/parking", tags=["Parking"])
