import uuid
from typing import Optional

from character_manager.schemas.common import CamelModel

class CharacterCreate(CamelModel):
    name: Optional[str] = None
    level: int = 0
    faction_id: int = 0
    race_id: int = 0
    class_id: int = 0
    realm_id: int = 0

class CharacterUpdate(CamelModel):
    """Partial update: omitted fields keep their stored value."""
    name: Optional[str] = None
    level: Optional[int] = None
    faction_id: Optional[int] = None
    race_id: Optional[int] = None
    class_id: Optional[int] = None
    realm_id: Optional[int] = None

class CharacterRead(CamelModel):
    id: int
    name: str
    level: int
    faction_id: int
    race_id: int
    class_id: int
    realm_id: int
    user_id: uuid.UUID

class CharacterDisplay(CamelModel):
    """캐릭터 목록용: 각 ID에 해당하는 이름을 함께 반환"""
    id: int
    name: str
    level: int
    realm_id: int
    realm_name: str = ""
    race_id: int
    race_name: str = ""
    class_id: int
    class_name: str = ""
    faction_id: int
    faction_name: str = ""

class DeletedCharacter(CamelModel):
    deleted_id: int
