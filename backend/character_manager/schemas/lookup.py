from typing import List

from character_manager.schemas.common import CamelModel

class FactionTypeRead(CamelModel):
    id: int
    name: str

class RaceTypeRead(CamelModel):
    id: int
    name: str

class ClassTypeRead(CamelModel):
    id: int
    name: str

class RealmRead(CamelModel):
    id: int
    name: str
    type: str

class CharacterMappingRead(CamelModel):
    id: int
    faction_id: int
    race_id: int
    class_id: int

class LookupData(CamelModel):
    race_types: List[RaceTypeRead] = []
    class_types: List[ClassTypeRead] = []
    faction_types: List[FactionTypeRead] = []
    realms: List[RealmRead] = []
