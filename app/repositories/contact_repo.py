from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from asyncpg import Connection, UniqueViolationError

from app.core.exceptions import DuplicateContactField
from app.schemas.contact_schema import UniquenessCheck

# Storage-level compound unique constraints and the field each protects.
CONSTRAINT_FIELDS = {
    "uq_contacts_owner_email": "email",
    "uq_contacts_owner_phone": "phone",
}


def _duplicate_from(exc: UniqueViolationError) -> DuplicateContactField:
    field = CONSTRAINT_FIELDS.get(getattr(exc, "constraint_name", None) or "", "email")
    return DuplicateContactField(field)


class ContactRepository:
    """Repository for contact rows, always scoped to an owner."""

    def __init__(self, conn: Connection):
        self.conn = conn

    # ------------------ Retrieval Methods ------------------ #

    async def list_by_owner(self, owner_id: UUID) -> list[dict]:
        sql = "SELECT * FROM contacts WHERE owner_id = $1 ORDER BY created_at DESC;"
        records = await self.conn.fetch(sql, owner_id)
        return [dict(record) for record in records]

    async def get_for_owner(self, contact_id: UUID, owner_id: UUID) -> dict | None:
        sql = "SELECT * FROM contacts WHERE id = $1 AND owner_id = $2;"
        record = await self.conn.fetchrow(sql, contact_id, owner_id)
        return dict(record) if record else None

    async def find_taken(
        self,
        owner_id: UUID,
        email: Optional[str],
        phone: Optional[str],
        exclude_id: Optional[UUID] = None,
    ) -> UniquenessCheck:
        sql = """
            SELECT
                COALESCE(bool_or(email = $2), FALSE) AS email_taken,
                COALESCE(bool_or(phone = $3), FALSE) AS phone_taken
            FROM contacts
            WHERE owner_id = $1
              AND ($4::uuid IS NULL OR id <> $4::uuid)
              AND (email = $2 OR phone = $3);
        """
        record = await self.conn.fetchrow(sql, owner_id, email, phone, exclude_id)
        return UniquenessCheck(
            email_taken=bool(record["email_taken"]),
            phone_taken=bool(record["phone_taken"]),
        )

    # ------------------ Mutations ------------------ #

    async def create(
        self,
        owner_id: UUID,
        name: str,
        email: str,
        phone: str,
        address: str = "",
        created_at: Optional[datetime] = None,
    ) -> dict:
        sql = """
            INSERT INTO contacts (name, email, phone, address, owner_id, created_at)
            VALUES ($1, $2, $3, $4, $5, $6)
            RETURNING *;
        """
        created_at = created_at or datetime.now(timezone.utc)
        try:
            record = await self.conn.fetchrow(sql, name, email, phone, address, owner_id, created_at)
        except UniqueViolationError as e:
            raise _duplicate_from(e)
        return dict(record)

    async def update(
        self,
        contact_id: UUID,
        owner_id: UUID,
        name: str,
        email: str,
        phone: str,
        address: str = "",
    ) -> dict | None:
        sql = """
            UPDATE contacts
            SET name = $3, email = $4, phone = $5, address = $6
            WHERE id = $1 AND owner_id = $2
            RETURNING *;
        """
        try:
            record = await self.conn.fetchrow(sql, contact_id, owner_id, name, email, phone, address)
        except UniqueViolationError as e:
            raise _duplicate_from(e)
        return dict(record) if record else None

    async def delete(self, contact_id: UUID, owner_id: UUID) -> bool:
        sql = "DELETE FROM contacts WHERE id = $1 AND owner_id = $2 RETURNING id;"
        deleted_id = await self.conn.fetchval(sql, contact_id, owner_id)
        return deleted_id is not None
