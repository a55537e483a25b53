import logging
import uuid
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from character_manager.core.result import Result
from character_manager.db.models.character import Character
from character_manager.db.models.lookup import FactionType, RaceType, ClassType, Realm
from character_manager.schemas.character import CharacterDisplay
from character_manager.services.validation import (
    CharacterValidator,
    DUPLICATE_NAME,
    INVALID_COMBINATION,
    load_validator,
    normalize_name,
)

logger = logging.getLogger(__name__)

CHARACTER_NULL = "Character is null."
INVALID_USER = "Invalid user ID."
NOT_FOUND = "Character not found or access denied."


def _is_empty_id(owner_id: Optional[uuid.UUID]) -> bool:
    return owner_id is None or owner_id.int == 0


def _is_duplicate_violation(error: IntegrityError) -> bool:
    message = str(error.orig).lower()
    return "uq_characters_name_realm" in message or ("unique" in message and "realm_id" in message)


async def _get_owned_character(db: AsyncSession, char_id: int, owner_id: uuid.UUID) -> Optional[Character]:
    """소유자가 일치하는 캐릭터만 조회 (다른 유저의 캐릭터는 존재 여부도 드러내지 않음)"""
    stmt = select(Character).where(Character.id == char_id, Character.user_id == owner_id)
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def _is_name_taken(db: AsyncSession, validator: CharacterValidator, name: str,
                         realm_id: int, exclude_id: Optional[int] = None) -> bool:
    stmt = select(Character).where(Character.realm_id == realm_id)
    if exclude_id is not None:
        stmt = stmt.where(Character.id != exclude_id)
    candidates = (await db.execute(stmt)).scalars().all()
    return validator.is_name_taken(name, realm_id, candidates)


async def _rollback_failure(db: AsyncSession, message: str, log_message: str) -> Result:
    await db.rollback()
    logger.error(log_message)
    return Result.failure(message)


async def list_characters(db: AsyncSession, owner_id: uuid.UUID) -> Result[List[CharacterDisplay]]:
    """
    유저가 소유한 모든 캐릭터를 진영/종족/직업/렐름 이름과 함께 조회합니다.
    빈 목록도 성공입니다.
    """
    if _is_empty_id(owner_id):
        return Result.failure(INVALID_USER)

    stmt = (
        select(
            Character,
            FactionType.name.label("faction_name"),
            RaceType.name.label("race_name"),
            ClassType.name.label("class_name"),
            Realm.name.label("realm_name"),
        )
        .outerjoin(FactionType, FactionType.id == Character.faction_id)
        .outerjoin(RaceType, RaceType.id == Character.race_id)
        .outerjoin(ClassType, ClassType.id == Character.class_id)
        .outerjoin(Realm, Realm.id == Character.realm_id)
        .where(Character.user_id == owner_id)
        .order_by(Character.id)
    )
    try:
        rows = (await db.execute(stmt)).all()
    except SQLAlchemyError as e:
        return await _rollback_failure(
            db, f"Failed to retrieve characters: {e}",
            f"Error fetching characters for user ID: {owner_id}: {e}",
        )

    characters = [
        CharacterDisplay(
            id=char.id,
            name=char.name,
            level=char.level,
            realm_id=char.realm_id,
            realm_name=realm_name or "",
            race_id=char.race_id,
            race_name=race_name or "",
            class_id=char.class_id,
            class_name=class_name or "",
            faction_id=char.faction_id,
            faction_name=faction_name or "",
        )
        for char, faction_name, race_name, class_name, realm_name in rows
    ]

    logger.info(f"Fetching characters for user ID: {owner_id}")
    return Result.success(characters)


async def get_character(db: AsyncSession, char_id: int, owner_id: uuid.UUID) -> Result[Character]:
    if _is_empty_id(owner_id):
        return Result.failure(INVALID_USER)

    try:
        character = await _get_owned_character(db, char_id, owner_id)
    except SQLAlchemyError as e:
        return await _rollback_failure(
            db, f"Failed to retrieve character: {e}",
            f"Error fetching character {char_id} for user ID: {owner_id}: {e}",
        )
    if character is None:
        return Result.failure(NOT_FOUND)

    logger.info(f"Fetching character {char_id} for user ID: {owner_id}")
    return Result.success(character)


async def create_character(db: AsyncSession, character_in, owner_id: uuid.UUID) -> Result[Character]:
    """
    새 캐릭터를 생성합니다.

    Checks run in a fixed order and the first failure is returned:
    input present, owner id, name, level, realm, (name, realm) uniqueness,
    then the faction/race/class combination.
    """
    # 1. 입력 확인
    if character_in is None:
        return Result.failure(CHARACTER_NULL)

    # 2. 소유자 확인
    if _is_empty_id(owner_id):
        return Result.failure(INVALID_USER)

    # 3. 이름 정규화 (trim + 소문자)
    name = normalize_name(character_in.name)

    try:
        validator = await load_validator(db)

        # 4. 이름 / 레벨 / 렐름 검증
        error = validator.validate_fields(name, character_in.level, character_in.realm_id)
        if error:
            return Result.failure(error)

        # 5. 같은 렐름 내 이름 중복 확인
        if await _is_name_taken(db, validator, name, character_in.realm_id):
            return Result.failure(DUPLICATE_NAME)

        # 6. 진영-종족-직업 조합 검증
        if not validator.is_valid_combination(character_in.faction_id, character_in.race_id, character_in.class_id):
            return Result.failure(INVALID_COMBINATION)

        # 7. DB 저장
        new_character = Character(
            name=name,
            level=character_in.level,
            faction_id=character_in.faction_id,
            race_id=character_in.race_id,
            class_id=character_in.class_id,
            realm_id=character_in.realm_id,
            user_id=owner_id,
        )
        db.add(new_character)
        await db.commit()
        await db.refresh(new_character)
    except IntegrityError as e:
        if _is_duplicate_violation(e):
            await db.rollback()
            logger.warning(f"Unique constraint rejected character '{name}' in realm {character_in.realm_id}")
            return Result.failure(DUPLICATE_NAME)
        return await _rollback_failure(
            db, f"Failed to add character: {e}",
            f"Exception occurred while saving new character for user ID: {owner_id}: {e}",
        )
    except SQLAlchemyError as e:
        return await _rollback_failure(
            db, f"Failed to add character: {e}",
            f"Exception occurred while saving new character for user ID: {owner_id}: {e}",
        )

    logger.info(f"Creating new character {name} for user ID: {owner_id}")
    return Result.success(new_character)


async def update_character(db: AsyncSession, char_id: int, character_in, owner_id: uuid.UUID) -> Result[Character]:
    """
    캐릭터를 수정합니다. 생략된 필드는 저장된 값을 유지하고,
    병합된 최종 상태를 기준으로 다시 검증합니다.
    """
    if character_in is None:
        return Result.failure(CHARACTER_NULL)

    if _is_empty_id(owner_id):
        return Result.failure(INVALID_USER)

    try:
        existing = await _get_owned_character(db, char_id, owner_id)
        if existing is None:
            return Result.failure(NOT_FOUND)

        # 들어온 값을 저장된 값 위에 병합
        name = normalize_name(character_in.name) if character_in.name is not None else existing.name
        level = character_in.level if character_in.level is not None else existing.level
        realm_id = character_in.realm_id if character_in.realm_id is not None else existing.realm_id
        faction_id = character_in.faction_id if character_in.faction_id is not None else existing.faction_id
        race_id = character_in.race_id if character_in.race_id is not None else existing.race_id
        class_id = character_in.class_id if character_in.class_id is not None else existing.class_id

        validator = await load_validator(db)

        error = validator.validate_fields(name, level, realm_id)
        if error:
            return Result.failure(error)

        # 이름이나 렐름이 바뀐 경우에만 중복 검사
        if name.casefold() != existing.name.casefold() or realm_id != existing.realm_id:
            if await _is_name_taken(db, validator, name, realm_id, exclude_id=existing.id):
                return Result.failure(DUPLICATE_NAME)

        if not validator.is_valid_combination(faction_id, race_id, class_id):
            return Result.failure(INVALID_COMBINATION)

        existing.name = name
        existing.level = level
        existing.realm_id = realm_id
        existing.faction_id = faction_id
        existing.race_id = race_id
        existing.class_id = class_id

        await db.commit()
        await db.refresh(existing)
    except IntegrityError as e:
        if _is_duplicate_violation(e):
            await db.rollback()
            logger.warning(f"Unique constraint rejected rename of character ID {char_id}")
            return Result.failure(DUPLICATE_NAME)
        return await _rollback_failure(
            db, f"Failed to update character: {e}", f"Failed to update character ID {char_id}: {e}",
        )
    except SQLAlchemyError as e:
        return await _rollback_failure(
            db, f"Failed to update character: {e}", f"Failed to update character ID {char_id}: {e}",
        )

    logger.info(f"Updated character with ID {char_id} for user ID: {owner_id}")
    return Result.success(existing)


async def delete_character(db: AsyncSession, char_id: int, owner_id: uuid.UUID) -> Result[int]:
    if _is_empty_id(owner_id):
        return Result.failure(INVALID_USER)

    try:
        character = await _get_owned_character(db, char_id, owner_id)
        if character is None:
            return Result.failure(NOT_FOUND)

        await db.delete(character)
        await db.commit()
    except SQLAlchemyError as e:
        return await _rollback_failure(
            db, f"Failed to delete character: {e}", f"Error deleting character ID {char_id}: {e}",
        )

    logger.info(f"Deleted character ID {char_id} for user ID: {owner_id}")
    return Result.success(char_id)
