import logging

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from character_manager.core import reference_data
from character_manager.db.models.lookup import (
    FactionType, RaceType, ClassType, Realm, CharacterMapping,
)

logger = logging.getLogger(__name__)


def _reference_rows():
    """Yields (model, rows) pairs in foreign-key order."""
    yield FactionType, [FactionType(id=i, name=n) for i, n in reference_data.FACTION_TYPES.items()]
    yield RaceType, [RaceType(id=i, name=n) for i, n in reference_data.RACE_TYPES.items()]
    yield ClassType, [ClassType(id=i, name=n) for i, n in reference_data.CLASS_TYPES.items()]
    yield Realm, [Realm(id=i, name=n, type=t) for i, (n, t) in reference_data.REALMS.items()]
    yield CharacterMapping, [
        CharacterMapping(id=i, faction_id=f, race_id=r, class_id=c)
        for i, (f, r, c) in enumerate(reference_data.CHARACTER_MAPPINGS, start=1)
    ]


async def seed_reference_data(session: AsyncSession) -> int:
    """
    기준 데이터를 시딩합니다. 비어 있는 테이블에만 삽입하므로 여러 번 호출해도 안전합니다.
    Returns the number of rows inserted.
    """
    inserted = 0
    for model, rows in _reference_rows():
        count = await session.scalar(select(func.count()).select_from(model))
        if count:
            continue
        session.add_all(rows)
        # 다음 테이블의 FK가 참조할 수 있도록 플러시
        await session.flush()
        inserted += len(rows)
        logger.info(f"Seeded {len(rows)} rows into {model.__tablename__}")

    await session.commit()
    return inserted
