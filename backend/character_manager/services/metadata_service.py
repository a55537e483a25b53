import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from character_manager.core.result import Result
from character_manager.db.models.lookup import (
    FactionType, RaceType, ClassType, Realm, CharacterMapping,
)
from character_manager.schemas.lookup import LookupData

logger = logging.getLogger(__name__)


async def _get_all(db: AsyncSession, model, label: str, empty_message: str) -> Result[list]:
    """기준 테이블 전체 조회. 비어 있으면 실패로 처리합니다."""
    try:
        result = await db.execute(select(model).order_by(model.id))
        rows = list(result.scalars().all())
    except SQLAlchemyError as e:
        logger.error(f"Failed to retrieve {label}: {e}")
        return Result.failure(f"Failed to retrieve {label}: {e}")

    if not rows:
        return Result.failure(empty_message)

    logger.info(f"Successfully retrieved {len(rows)} {label}.")
    return Result.success(rows)


async def get_faction_types(db: AsyncSession) -> Result[list]:
    return await _get_all(db, FactionType, "factions", "No factions found.")


async def get_race_types(db: AsyncSession) -> Result[list]:
    return await _get_all(db, RaceType, "races", "No races found.")


async def get_class_types(db: AsyncSession) -> Result[list]:
    return await _get_all(db, ClassType, "classes", "No classes found.")


async def get_character_mappings(db: AsyncSession) -> Result[list]:
    return await _get_all(db, CharacterMapping, "character mappings", "No character mappings found.")


async def get_realms(db: AsyncSession) -> Result[list]:
    return await _get_all(db, Realm, "realms", "No realms found.")


async def get_lookup_data(db: AsyncSession) -> Result[LookupData]:
    """
    종족/직업/진영/렐름을 한 번에 조회합니다. 같은 세션에서 순차적으로 실행합니다.
    Empty tables give empty lists here rather than a failure.
    """
    try:
        race_types = (await db.execute(select(RaceType).order_by(RaceType.id))).scalars().all()
        class_types = (await db.execute(select(ClassType).order_by(ClassType.id))).scalars().all()
        faction_types = (await db.execute(select(FactionType).order_by(FactionType.id))).scalars().all()
        realms = (await db.execute(select(Realm).order_by(Realm.id))).scalars().all()
    except SQLAlchemyError as e:
        logger.error(f"Failed to retrieve lookup data: {e}")
        return Result.failure(f"Failed to retrieve lookup data: {e}")

    lookup = LookupData.model_validate({
        "race_types": race_types,
        "class_types": class_types,
        "faction_types": faction_types,
        "realms": realms,
    })
    logger.info("Successfully retrieved lookup data.")
    return Result.success(lookup)
