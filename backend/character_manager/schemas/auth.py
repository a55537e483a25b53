import uuid
from datetime import datetime
from typing import Optional

from character_manager.schemas.common import CamelModel

# Length/emptiness rules live in the auth service so callers get its
# messages instead of a generic 422.

class UserDto(CamelModel):
    username: str = ""
    password: str = ""

class UserRead(CamelModel):
    id: uuid.UUID
    username: str
    role: str
    created_at: datetime

class TokenResponse(CamelModel):
    access_token: str
    refresh_token: str

class RefreshTokenRequest(CamelModel):
    # 문자열로 받아 서비스에서 UUID로 파싱 (형식 오류도 401로 처리)
    user_id: Optional[str] = None
    refresh_token: str = ""

class LogoutRequest(CamelModel):
    refresh_token: str = ""
