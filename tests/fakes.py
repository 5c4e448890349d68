"""In-memory stand-ins for the asyncpg repositories.

They keep the same method signatures and enforce the same unique rules as
the database schema, so services and endpoints behave as they would
against PostgreSQL.
"""
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from app.core.exceptions import DuplicateContactField, UserAlreadyExistsException
from app.schemas.contact_schema import UniquenessCheck


class FakeUserRepository:
    def __init__(self):
        self.rows: dict[uuid.UUID, dict] = {}

    async def get_by_email(self, email: str) -> Optional[dict]:
        for row in self.rows.values():
            if row["email"] == email:
                return dict(row)
        return None

    async def get_by_id(self, user_id) -> Optional[dict]:
        row = self.rows.get(user_id)
        return dict(row) if row else None

    async def create(self, user_in: dict) -> dict:
        if await self.get_by_email(user_in["email"]):
            raise UserAlreadyExistsException("email")
        row = {
            "id": uuid.uuid4(),
            "email": user_in["email"],
            "hashed_password": user_in["hashed_password"],
            "name": user_in["name"],
            "created_at": datetime.now(timezone.utc),
        }
        self.rows[row["id"]] = row
        return dict(row)


class FakeContactRepository:
    def __init__(self):
        self.rows: dict[uuid.UUID, dict] = {}
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def _tick(self) -> datetime:
        self._clock += timedelta(seconds=1)
        return self._clock

    def _enforce_unique(self, owner_id, email, phone, exclude_id=None):
        for row in self.rows.values():
            if row["owner_id"] != owner_id or row["id"] == exclude_id:
                continue
            if row["email"] == email:
                raise DuplicateContactField("email")
            if row["phone"] == phone:
                raise DuplicateContactField("phone")

    async def list_by_owner(self, owner_id) -> list[dict]:
        rows = [dict(r) for r in self.rows.values() if r["owner_id"] == owner_id]
        return sorted(rows, key=lambda r: r["created_at"], reverse=True)

    async def get_for_owner(self, contact_id, owner_id) -> Optional[dict]:
        row = self.rows.get(contact_id)
        if row is None or row["owner_id"] != owner_id:
            return None
        return dict(row)

    async def find_taken(self, owner_id, email, phone, exclude_id=None) -> UniquenessCheck:
        check = UniquenessCheck()
        for row in self.rows.values():
            if row["owner_id"] != owner_id or row["id"] == exclude_id:
                continue
            if email is not None and row["email"] == email:
                check.email_taken = True
            if phone is not None and row["phone"] == phone:
                check.phone_taken = True
        return check

    async def create(self, owner_id, name, email, phone, address="", created_at=None) -> dict:
        self._enforce_unique(owner_id, email, phone)
        row = {
            "id": uuid.uuid4(),
            "name": name,
            "email": email,
            "phone": phone,
            "address": address,
            "owner_id": owner_id,
            "created_at": created_at or self._tick(),
        }
        self.rows[row["id"]] = row
        return dict(row)

    async def update(self, contact_id, owner_id, name, email, phone, address="") -> Optional[dict]:
        row = self.rows.get(contact_id)
        if row is None or row["owner_id"] != owner_id:
            return None
        self._enforce_unique(owner_id, email, phone, exclude_id=contact_id)
        row.update(name=name, email=email, phone=phone, address=address)
        return dict(row)

    async def delete(self, contact_id, owner_id) -> bool:
        row = self.rows.get(contact_id)
        if row is None or row["owner_id"] != owner_id:
            return False
        del self.rows[contact_id]
        return True
