from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import DeclarativeBase
from typing import AsyncGenerator
import logging

from character_manager.core import config

logger = logging.getLogger(__name__)

engine = create_async_engine(config.DATABASE_URL, echo=config.SQL_ECHO)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)

class Base(DeclarativeBase):
    pass

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        yield session

async def init_db():
    """
    서버 시작 시 테이블을 생성하고 기준 데이터(진영/종족/직업/렐름/매핑)를 시딩합니다.
    """
    # Base.metadata 등록을 위해 모델 임포트
    from character_manager.db.models import user, character, lookup  # noqa: F401
    from character_manager.db.seed import seed_reference_data

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with AsyncSessionLocal() as session:
        await seed_reference_data(session)

    logger.info("Database initialised")
