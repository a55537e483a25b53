from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from character_manager.db.database import get_db
from character_manager.schemas.lookup import (
    FactionTypeRead, RaceTypeRead, ClassTypeRead, RealmRead, CharacterMappingRead, LookupData,
)
from character_manager.services import metadata_service

router = APIRouter(prefix="/charactermetadata", tags=["charactermetadata"])
lookup_router = APIRouter(prefix="/lookupdata", tags=["lookupdata"])

def _unwrap(result):
    if not result.is_success:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=result.error)
    return result.value

@router.get("/factiontypes", response_model=List[FactionTypeRead])
async def get_faction_types(db: AsyncSession = Depends(get_db)):
    return _unwrap(await metadata_service.get_faction_types(db))

@router.get("/racetypes", response_model=List[RaceTypeRead])
async def get_race_types(db: AsyncSession = Depends(get_db)):
    return _unwrap(await metadata_service.get_race_types(db))

@router.get("/classtypes", response_model=List[ClassTypeRead])
async def get_class_types(db: AsyncSession = Depends(get_db)):
    return _unwrap(await metadata_service.get_class_types(db))

@router.get("/charactermappings", response_model=List[CharacterMappingRead])
async def get_character_mappings(db: AsyncSession = Depends(get_db)):
    return _unwrap(await metadata_service.get_character_mappings(db))

@router.get("/realms", response_model=List[RealmRead])
async def get_realms(db: AsyncSession = Depends(get_db)):
    return _unwrap(await metadata_service.get_realms(db))

@lookup_router.get("", response_model=LookupData)
async def get_lookup_data(db: AsyncSession = Depends(get_db)):
    """Races, classes, factions and realms in one response, for populating the SPA's forms."""
    return _unwrap(await metadata_service.get_lookup_data(db))
