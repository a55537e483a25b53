# backend/character_manager/api/v1/characters.py
import uuid
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from character_manager.core.security import get_current_user_id
from character_manager.db.database import get_db
from character_manager.schemas.character import (
    CharacterCreate, CharacterUpdate, CharacterRead, CharacterDisplay, DeletedCharacter,
)
from character_manager.services import character_service

# 캐릭터 전용 라우터 정의 (모든 엔드포인트는 인증 필요)
router = APIRouter(prefix="/character", tags=["character"])

@router.get("", response_model=List[CharacterDisplay])
async def get_characters(
    current_user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """내 캐릭터 목록 조회"""
    result = await character_service.list_characters(db, current_user_id)
    if not result.is_success:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=result.error)
    return result.value

@router.get("/{char_id}", response_model=CharacterRead)
async def get_character(
    char_id: int,
    current_user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    result = await character_service.get_character(db, char_id, current_user_id)
    if not result.is_success:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=result.error)
    return result.value

@router.post("", response_model=CharacterRead, status_code=status.HTTP_201_CREATED)
async def create_character(
    char_data: CharacterCreate,
    request: Request,
    response: Response,
    current_user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """새로운 캐릭터를 생성합니다."""
    result = await character_service.create_character(db, char_data, current_user_id)
    if not result.is_success:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=result.error)
    response.headers["Location"] = str(request.url_for("get_character", char_id=result.value.id))
    return result.value

@router.put("/{char_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_character(
    char_id: int,
    char_data: CharacterUpdate,
    current_user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """캐릭터 정보를 수정합니다."""
    result = await character_service.update_character(db, char_id, char_data, current_user_id)
    if not result.is_success:
        code = (status.HTTP_404_NOT_FOUND if result.error == character_service.NOT_FOUND
                else status.HTTP_400_BAD_REQUEST)
        raise HTTPException(status_code=code, detail=result.error)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.delete("/{char_id}", response_model=DeletedCharacter)
async def delete_character(
    char_id: int,
    current_user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    result = await character_service.delete_character(db, char_id, current_user_id)
    if not result.is_success:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=result.error)
    return DeletedCharacter(deleted_id=result.value)
