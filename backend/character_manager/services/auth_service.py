# backend/character_manager/services/auth_service.py
import logging
import uuid
from typing import Optional, Union

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from character_manager.core.result import Result
from character_manager.core.security import (
    create_access_token,
    generate_refresh_token,
    get_password_hash,
    refresh_token_expiry,
    utc_now,
    verify_password,
)
from character_manager.db.models.user import User
from character_manager.schemas.auth import TokenResponse
from character_manager.services.validation import normalize_name as normalize_username

logger = logging.getLogger(__name__)

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 20

REQUEST_NULL = "Request is null."
CREDENTIALS_REQUIRED = "Username and password are required."
USERNAME_LENGTH = "Username must be between 3 and 20 characters."
USERNAME_EXISTS = "Username already exists."
INVALID_CREDENTIALS = "Invalid username or password."
INVALID_REQUEST = "Invalid request."
REFRESH_INVALID = "Refresh token is invalid or expired."
REFRESH_SAVE_FAILED = "Issue with saving Refresh Token."
REFRESH_REQUIRED = "Refresh token required."
REFRESH_NOT_FOUND = "User with this refresh token not found."


def _parse_user_id(user_id: Union[uuid.UUID, str, None]) -> Optional[uuid.UUID]:
    """UUID 또는 문자열을 UUID로 변환. 비어 있거나 형식이 틀리면 None."""
    if user_id is None:
        return None
    if not isinstance(user_id, uuid.UUID):
        try:
            user_id = uuid.UUID(str(user_id).strip())
        except ValueError:
            return None
    if user_id.int == 0:
        return None
    return user_id


async def register_user(db: AsyncSession, user_in) -> Result[User]:
    """
    회원가입: 입력 검증, 중복 확인, 비밀번호 해싱 후 유저 생성
    """
    # 1. 입력 확인
    if user_in is None:
        return Result.failure(REQUEST_NULL)

    # 2. 정규화
    username = normalize_username(user_in.username)
    password = user_in.password or ""

    if not username or not password.strip():
        return Result.failure(CREDENTIALS_REQUIRED)

    # 3. 아이디 길이 검증 (3~20자)
    if len(username) < USERNAME_MIN_LENGTH or len(username) > USERNAME_MAX_LENGTH:
        return Result.failure(USERNAME_LENGTH)

    try:
        # 4. 아이디 중복 확인
        existing = await db.execute(select(User.id).where(User.username == username))
        if existing.first() is not None:
            return Result.failure(USERNAME_EXISTS)

        # 5. 유저 생성 및 비밀번호 해싱
        new_user = User(username=username, password_hash=get_password_hash(password))

        # 6. DB 저장
        logger.info(f"Registering user: '{username}'")
        db.add(new_user)
        await db.commit()
        await db.refresh(new_user)
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Exception occurred while registering user '{username}': {e}")
        return Result.failure(f"Failed to register user: {e}")

    logger.info(f"Successfully registered user: '{username}'")
    return Result.success(new_user)


async def authenticate_user(db: AsyncSession, user_in) -> Result[TokenResponse]:
    """
    로그인: 자격 증명 확인 후 액세스/리프레시 토큰 발급
    """
    if user_in is None:
        return Result.failure(REQUEST_NULL)

    password = user_in.password or ""
    if not (user_in.username or "").strip() or not password.strip():
        return Result.failure(CREDENTIALS_REQUIRED)

    username = normalize_username(user_in.username)

    try:
        result = await db.execute(select(User).where(User.username == username))
        user = result.scalar_one_or_none()
    except SQLAlchemyError as e:
        await db.rollback()
        # 응답은 일반 로그인 실패와 동일하게 유지
        logger.error(f"Exception occurred while looking up user '{username}': {e}")
        return Result.failure(INVALID_CREDENTIALS)

    # 존재하지 않는 유저와 틀린 비밀번호를 구분하지 않음
    if not user or not verify_password(password, user.password_hash):
        return Result.failure(INVALID_CREDENTIALS)

    tokens = await create_token_response(db, user)
    if tokens is None:
        return Result.failure(REFRESH_SAVE_FAILED)

    logger.info(f"Successfully logged in user: '{username}'")
    return Result.success(tokens)


async def refresh_tokens(db: AsyncSession, user_id, refresh_token: Optional[str]) -> Result[TokenResponse]:
    """
    저장된 리프레시 토큰을 검증하고, 유효하면 두 토큰을 모두 재발급(rotation)합니다.
    """
    parsed_id = _parse_user_id(user_id)
    if parsed_id is None or not (refresh_token or "").strip():
        return Result.failure(INVALID_REQUEST)

    user = await validate_refresh_token(db, parsed_id, refresh_token)
    if user is None:
        return Result.failure(REFRESH_INVALID)

    tokens = await create_token_response(db, user)
    if tokens is None:
        return Result.failure(REFRESH_SAVE_FAILED)

    logger.info(f"Successfully refreshed token for user: '{parsed_id}'")
    return Result.success(tokens)


async def logout_user(db: AsyncSession, refresh_token: Optional[str]) -> Result[bool]:
    """
    리프레시 토큰으로 유저를 찾아 토큰과 만료 시각을 제거(폐기)합니다.
    """
    if not (refresh_token or "").strip():
        return Result.failure(REFRESH_REQUIRED)

    user_id = None
    try:
        result = await db.execute(select(User).where(User.refresh_token == refresh_token))
        user = result.scalar_one_or_none()
        if user is None:
            return Result.failure(REFRESH_NOT_FOUND)

        user_id = user.id
        user.refresh_token = None
        user.refresh_token_expiration = None
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Exception occurred while logging out user ID: {user_id}: {e}")
        return Result.failure(f"Failed to log out user with the following error: {e}")

    logger.info(f"Successfully logged out user ID: {user_id}")
    return Result.success(True)


async def validate_refresh_token(db: AsyncSession, user_id: uuid.UUID, refresh_token: str) -> Optional[User]:
    """토큰이 저장된 값과 정확히 일치하고 만료되지 않았을 때만 유저를 반환"""
    try:
        user = await db.get(User, user_id)
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Exception occurred while validating refresh token for user ID: {user_id}: {e}")
        return None
    if user is None or user.refresh_token != refresh_token:
        return None
    if user.refresh_token_expiration is None or user.refresh_token_expiration <= utc_now():
        return None
    return user


async def create_token_response(db: AsyncSession, user: User) -> Optional[TokenResponse]:
    refresh_token = await generate_and_save_refresh_token(db, user)
    if refresh_token is None:
        return None
    return TokenResponse(
        access_token=create_access_token(user.id, user.username, user.role),
        refresh_token=refresh_token,
    )


async def generate_and_save_refresh_token(db: AsyncSession, user: User) -> Optional[str]:
    """새 리프레시 토큰을 생성해 기존 값을 덮어쓰고(rotation) 저장합니다."""
    user_id = user.id
    refresh_token = generate_refresh_token()
    user.refresh_token = refresh_token
    user.refresh_token_expiration = refresh_token_expiry()

    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Failed to save refresh token for user: {user_id}: {e}")
        return None

    logger.info(f"Refresh token updated for user: {user_id}")
    return refresh_token
