from sqladmin.authentication import AuthenticationBackend
from starlette.requests import Request
from sqlalchemy import select

from character_manager.core import config
from character_manager.core.security import verify_password
from character_manager.db.database import AsyncSessionLocal
from character_manager.db.models.user import User
from character_manager.services.auth_service import normalize_username

ADMIN_ROLE = "admin"

class AdminAuth(AuthenticationBackend):
    async def login(self, request: Request) -> bool:
        form = await request.form()
        username = normalize_username(form.get("username"))
        password = form.get("password") or ""

        async with AsyncSessionLocal() as session:
            stmt = select(User).where(User.username == username)
            result = await session.execute(stmt)
            user = result.scalar_one_or_none()

            # 1. 유저 존재 및 비밀번호 확인
            if not user or not verify_password(password, user.password_hash):
                return False

            # 2. 관리자 권한 확인
            if user.role != ADMIN_ROLE:
                return False

            # 3. 세션에 user_id 저장
            request.session.update({"user_id": str(user.id)})
            return True

    async def logout(self, request: Request) -> bool:
        request.session.clear()
        return True

    async def authenticate(self, request: Request) -> bool:
        return bool(request.session.get("user_id"))

authentication_backend = AdminAuth(secret_key=config.ADMIN_SESSION_SECRET)
