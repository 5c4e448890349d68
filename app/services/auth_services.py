from datetime import timedelta
from typing import Optional

from app.core.config import settings
from app.core.exceptions import UserAlreadyExistsException
from app.core.security import create_access_token, hash_password, verify_password
from app.repositories.user_repo import UserRepository
from app.schemas.auth_schema import UserCreate


class AuthService:
    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    async def register_user(self, user_in: UserCreate) -> dict:
        existing = await self.user_repo.get_by_email(user_in.email)
        if existing:
            raise UserAlreadyExistsException("email")

        user_data = {
            "email": user_in.email,
            "name": user_in.name,
            "hashed_password": hash_password(user_in.password),
        }
        return await self.user_repo.create(user_in=user_data)

    async def authenticate(self, email: str, password: str) -> Optional[dict]:
        user = await self.user_repo.get_by_email(email)
        if not user:
            return None
        if not verify_password(password, user.get("hashed_password", "")):
            return None
        return user

    def create_token_for_user(self, user: dict) -> str:
        access_token_expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        return create_access_token(
            user_id=str(user["id"]),
            email=user["email"],
            expires_delta=access_token_expires,
        )
