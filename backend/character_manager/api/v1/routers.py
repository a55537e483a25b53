# backend/character_manager/api/v1/routers.py
from fastapi import APIRouter
from character_manager.api.v1 import auth, characters, metadata

# 메인 API 라우터 (/api)
api_router = APIRouter(prefix="/api")

# --- 각 기능별 라우터 통합 ---

# 1. 인증 라우터
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])

# 2. 캐릭터 라우터 (Bearer 토큰 필요)
api_router.include_router(characters.router)

# 3. 기준 데이터 라우터 (공개)
api_router.include_router(metadata.router)
api_router.include_router(metadata.lookup_router)
