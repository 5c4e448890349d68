from typing import Optional
from uuid import UUID

from asyncpg import Connection, UniqueViolationError

from app.core.exceptions import UserAlreadyExistsException


class UserRepository:

    def __init__(self, conn: Connection):
        self.conn = conn

    async def get_by_email(self, email: str) -> Optional[dict]:
        sql = "SELECT * FROM users WHERE email = $1;"
        record = await self.conn.fetchrow(sql, email)
        return dict(record) if record else None

    async def get_by_id(self, user_id: UUID) -> Optional[dict]:
        sql = "SELECT * FROM users WHERE id = $1;"
        record = await self.conn.fetchrow(sql, user_id)
        return dict(record) if record else None

    async def create(self, user_in: dict) -> dict:
        sql = """
            INSERT INTO users (email, hashed_password, name)
            VALUES ($1, $2, $3)
            RETURNING *;
        """
        try:
            record = await self.conn.fetchrow(
                sql,
                user_in["email"],
                user_in["hashed_password"],
                user_in["name"],
            )
        except UniqueViolationError:
            raise UserAlreadyExistsException("email")
        return dict(record)
