import re
from typing import Iterable, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from character_manager.db.models.lookup import Realm, CharacterMapping

NAME_MAX_LENGTH = 15
NAME_MIN_LENGTH = 3
LEVEL_MIN = 1
LEVEL_MAX = 50

NAME_INVALID = "Name is invalid or exceeds 15 characters."
NAME_LENGTH = "Name must be between 3 and 15 characters."
NAME_LETTERS = "Name can only contain letters."
LEVEL_RANGE = "Level must be between 1 and 50."
INVALID_REALM = "Invalid realm ID."
DUPLICATE_NAME = "Character with the same name already exists."
INVALID_COMBINATION = "Invalid faction-race-class combination."

_LETTERS_ONLY = re.compile(r"^[A-Za-z]+$")

Mapping = Tuple[int, int, int]


def normalize_name(name: Optional[str]) -> str:
    return (name or "").strip().lower()


class CharacterValidator:
    """
    Character rules checked against read-only reference data.

    The realm ids and (faction, race, class) triples are handed in at
    construction; the validator never reads the database itself.
    """

    def __init__(self, realm_ids: Iterable[int], mappings: Iterable[Mapping]):
        self.realm_ids = frozenset(realm_ids)
        self.mappings = tuple(mappings)
        self.faction_ids = frozenset(m[0] for m in self.mappings)

    def validate_fields(self, name: str, level: int, realm_id: int) -> Optional[str]:
        """
        Name, level and realm checks in order. `name` must already be
        normalized. Returns the first error message, or None.
        """
        if not name or len(name) > NAME_MAX_LENGTH:
            return NAME_INVALID
        if len(name) < NAME_MIN_LENGTH:
            return NAME_LENGTH
        if not _LETTERS_ONLY.match(name):
            return NAME_LETTERS
        if level is None or level < LEVEL_MIN or level > LEVEL_MAX:
            return LEVEL_RANGE
        if not self.is_valid_realm(realm_id):
            return INVALID_REALM
        return None

    def is_valid_realm(self, realm_id: int) -> bool:
        return realm_id is not None and realm_id > 0 and realm_id in self.realm_ids

    @staticmethod
    def is_name_taken(name: str, realm_id: int, existing: Iterable) -> bool:
        """Case-insensitive linear scan over characters with `.name` and `.realm_id`."""
        target = name.casefold()
        for other in existing:
            if other.realm_id == realm_id and other.name.casefold() == target:
                return True
        return False

    def is_valid_combination(self, faction_id: int, race_id: int, class_id: int) -> bool:
        if faction_id not in self.faction_ids:
            return False

        # 1. 진영 + 종족이 일치하는 매핑만 수집
        races = [m for m in self.mappings if m[0] == faction_id and m[1] == race_id]
        if not races:
            return False

        # 2. 해당 종족에 허용된 직업인지 확인
        for _, _, allowed_class in races:
            if allowed_class == class_id:
                return True
        return False


async def load_validator(db: AsyncSession) -> CharacterValidator:
    """Builds a validator from the realms and mapping rows currently stored."""
    realm_ids = (await db.execute(select(Realm.id))).scalars().all()
    rows = (await db.execute(
        select(CharacterMapping.faction_id, CharacterMapping.race_id, CharacterMapping.class_id)
    )).all()
    return CharacterValidator(realm_ids, [tuple(r) for r in rows])
