import asyncio
import logging

from character_manager.db.database import engine, Base, AsyncSessionLocal
from character_manager.db.models import user, character, lookup  # noqa: F401  모든 모델 로드
from character_manager.db.seed import seed_reference_data

logger = logging.getLogger(__name__)


async def reset_database():
    """Drops every table, recreates the schema and re-seeds the reference data."""
    print("--- 데이터베이스 초기화 및 리셋 시작 ---")
    async with engine.begin() as conn:
        print("1. 기존 모든 테이블 삭제 중...")
        await conn.run_sync(Base.metadata.drop_all)
        print("2. 최신 스키마로 테이블 생성 중...")
        await conn.run_sync(Base.metadata.create_all)

    print("3. 기준 데이터 시딩(Seeding) 중...")
    async with AsyncSessionLocal() as session:
        inserted = await seed_reference_data(session)

    print(f"--- 리셋 완료 ({inserted} reference rows) ---")
    return inserted


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(reset_database())
