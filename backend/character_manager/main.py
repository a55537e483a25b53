import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from character_manager.core import config
from character_manager.api.v1.routers import api_router
from character_manager.db.database import engine, init_db
from character_manager.admin_auth import authentication_backend
from character_manager.admin_panel import mount_admin

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    서버 시작 시 테이블 생성 및 기준 데이터 시딩, 종료 시 커넥션 풀 정리
    """
    await init_db()
    yield
    await engine.dispose()


app = FastAPI(
    title="Character Manager API",
    description="An API for managing characters",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS: 프론트엔드(SPA)가 다른 오리진에서 API를 호출할 수 있도록 허용
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)

mount_admin(app, engine, authentication_backend)

@app.get("/")
async def root():
    """
    서버 상태 확인용 루트 엔드포인트입니다.
    """
    return {"message": "Welcome to Character Manager API"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("character_manager.main:app", host="127.0.0.1", port=8000, reload=True)
