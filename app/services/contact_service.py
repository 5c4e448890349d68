# app/services/contact_service.py

import logging
from typing import Optional
from uuid import UUID

from app.core.exceptions import ContactNotFound, DuplicateContactField
from app.repositories.contact_repo import ContactRepository
from app.schemas.contact_schema import ContactIn
from app.services.contact_validator import ContactUniquenessValidator

logger = logging.getLogger(__name__)


class ContactService:
    def __init__(self, contact_repo: ContactRepository, validator: ContactUniquenessValidator):
        self.contact_repo = contact_repo
        self.validator = validator

    async def list_contacts(self, owner_id: UUID) -> list[dict]:
        return await self.contact_repo.list_by_owner(owner_id)

    async def create_contact(self, owner_id: UUID, body: ContactIn) -> dict:
        check = await self.validator.check_create(owner_id, body.email, body.phone)
        if check.taken_fields:
            raise DuplicateContactField(*check.taken_fields)

        contact = await self.contact_repo.create(
            owner_id=owner_id,
            name=body.name,
            email=body.email,
            phone=body.phone,
            address=body.normalized_address(),
        )
        logger.info("Contact %s created for user %s", contact["id"], owner_id)
        return contact

    async def update_contact(self, owner_id: UUID, contact_id: UUID, body: ContactIn) -> dict:
        existing = await self.contact_repo.get_for_owner(contact_id, owner_id)
        if existing is None:
            raise ContactNotFound()

        check = await self.validator.check_update(owner_id, contact_id, body.email, body.phone)
        if check.taken_fields:
            raise DuplicateContactField(*check.taken_fields)

        contact = await self.contact_repo.update(
            contact_id=contact_id,
            owner_id=owner_id,
            name=body.name,
            email=body.email,
            phone=body.phone,
            address=body.normalized_address(),
        )
        # Deleted between the lookup and the write.
        if contact is None:
            raise ContactNotFound()
        logger.info("Contact %s updated", contact_id)
        return contact

    async def delete_contact(self, owner_id: UUID, contact_id: UUID) -> None:
        deleted = await self.contact_repo.delete(contact_id, owner_id)
        if not deleted:
            raise ContactNotFound()
        logger.info("Contact %s deleted", contact_id)

    async def validate_fields(
        self,
        owner_id: UUID,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        exclude_id: Optional[UUID] = None,
    ) -> None:
        """Pre-flight uniqueness check used for live form feedback.

        Raises DuplicateContactField naming the email first when both are taken.
        """
        if not email and not phone:
            return
        if exclude_id is None:
            check = await self.validator.check_create(owner_id, email or None, phone or None)
        else:
            check = await self.validator.check_update(owner_id, exclude_id, email or None, phone or None)
        if check.taken_fields:
            raise DuplicateContactField(check.taken_fields[0])
