# app/services/contact_validator.py

from typing import Optional
from uuid import UUID

from app.repositories.contact_repo import ContactRepository
from app.schemas.contact_schema import UniquenessCheck


class ContactUniquenessValidator:
    """Per-owner email/phone uniqueness checks.

    Email and phone are checked independently, so a request can have a taken
    email and a free phone. The result is advisory: the compound unique
    constraints on the contacts table still decide concurrent writes.
    """

    def __init__(self, contact_repo: ContactRepository):
        self.contact_repo = contact_repo

    async def check_create(self, owner_id: UUID, email: Optional[str], phone: Optional[str]) -> UniquenessCheck:
        return await self.contact_repo.find_taken(owner_id, email, phone)

    async def check_update(
        self,
        owner_id: UUID,
        contact_id: UUID,
        email: Optional[str],
        phone: Optional[str],
    ) -> UniquenessCheck:
        return await self.contact_repo.find_taken(owner_id, email, phone, exclude_id=contact_id)
