# backend/character_manager/api/v1/auth.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from character_manager.db.database import get_db
from character_manager.schemas.auth import UserDto, UserRead, TokenResponse, RefreshTokenRequest, LogoutRequest
from character_manager.services import auth_service

router = APIRouter()

@router.post("/register", response_model=UserRead)
async def register(user_in: UserDto, db: AsyncSession = Depends(get_db)):
    """회원가입 엔드포인트: 서비스로 로직 위임"""
    result = await auth_service.register_user(db, user_in)
    if not result.is_success:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=result.error)
    return result.value

@router.post("/login", response_model=TokenResponse)
async def login(user_in: UserDto, db: AsyncSession = Depends(get_db)):
    """로그인 엔드포인트: 액세스 토큰과 리프레시 토큰을 반환"""
    result = await auth_service.authenticate_user(db, user_in)
    if not result.is_success:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=result.error)
    return result.value

@router.post("/refresh-token", response_model=TokenResponse)
async def refresh_token(request: RefreshTokenRequest, db: AsyncSession = Depends(get_db)):
    """리프레시 토큰으로 두 토큰을 재발급"""
    result = await auth_service.refresh_tokens(db, request.user_id, request.refresh_token)
    if not result.is_success:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=result.error)
    return result.value

@router.post("/logout", response_model=bool)
async def logout(request: LogoutRequest, db: AsyncSession = Depends(get_db)):
    """리프레시 토큰 폐기"""
    result = await auth_service.logout_user(db, request.refresh_token)
    if not result.is_success:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=result.error)
    return result.value
