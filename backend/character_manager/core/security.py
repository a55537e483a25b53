import base64
import secrets
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext

from character_manager.core import config

# 비밀번호 해시 설정 (bcrypt, salt 포함)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Roles allowed to use the character endpoints
CHARACTER_ROLES = {"user", "admin"}

REFRESH_TOKEN_BYTES = 32  # 256 bits


def utc_now() -> datetime:
    """Naive UTC timestamp, matching how the database columns are stored."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


# --- Passwords ---

def get_password_hash(password: str) -> str:
    """비밀번호를 해시화합니다."""
    return pwd_context.hash(password[:72])


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """평문 비밀번호와 해시된 비밀번호를 비교합니다."""
    return pwd_context.verify(plain_password[:72], hashed_password)


# --- Tokens ---

def create_access_token(user_id: uuid.UUID, username: str, role: str,
                        expires_delta: Optional[timedelta] = None) -> str:
    """Signs a short-lived JWT carrying the user's id, name and role."""
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode = {
        "sub": str(user_id),
        "name": username,
        "role": role,
        "iss": config.JWT_ISSUER,
        "aud": config.JWT_AUDIENCE,
        "iat": now,
        "exp": expire,
    }
    return jwt.encode(to_encode, config.SECRET_KEY, algorithm=config.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Verifies signature, expiry, issuer and audience. Raises JWTError."""
    return jwt.decode(
        token,
        config.SECRET_KEY,
        algorithms=[config.JWT_ALGORITHM],
        audience=config.JWT_AUDIENCE,
        issuer=config.JWT_ISSUER,
    )


def generate_refresh_token() -> str:
    """Opaque 256-bit random secret, base64 encoded. Never signed or parsed."""
    return base64.b64encode(secrets.token_bytes(REFRESH_TOKEN_BYTES)).decode("ascii")


def refresh_token_expiry() -> datetime:
    return utc_now() + timedelta(days=config.REFRESH_TOKEN_EXPIRE_DAYS)


# --- HTTP API 검증 함수 ---

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")


def _credentials_exception() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )


def verify_token(token: str) -> uuid.UUID:
    """
    JWT 토큰을 디코딩하고 유효성을 검증한 뒤 user_id(UUID)를 반환합니다.
    The role claim must allow character access and the subject must be a
    non-nil UUID.
    """
    try:
        payload = decode_access_token(token)
    except JWTError:
        raise _credentials_exception()

    if payload.get("role") not in CHARACTER_ROLES:
        raise _credentials_exception()

    subject = payload.get("sub")
    if not subject:
        raise _credentials_exception()
    try:
        user_id = uuid.UUID(subject)
    except (TypeError, ValueError):
        raise _credentials_exception()
    if user_id.int == 0:
        raise _credentials_exception()
    return user_id


async def get_current_user_id(token: str = Depends(oauth2_scheme)) -> uuid.UUID:
    """
    FastAPI Dependency: 헤더에서 토큰을 추출하고 검증하여 user_id를 반환합니다.
    """
    return verify_token(token)
