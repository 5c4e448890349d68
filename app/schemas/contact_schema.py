# app/schemas/contact_schema.py

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, constr

# Kept in step with the column widths in app/db/models/contact_model.py.
NAME_MAX_LENGTH = 120
PHONE_MAX_LENGTH = 40
ADDRESS_MAX_LENGTH = 255

NameStr = constr(strip_whitespace=True, min_length=1, max_length=NAME_MAX_LENGTH)
PhoneStr = constr(strip_whitespace=True, min_length=1, max_length=PHONE_MAX_LENGTH)
AddressStr = constr(strip_whitespace=True, max_length=ADDRESS_MAX_LENGTH)


class ContactIn(BaseModel):
    """Body accepted by both create and update."""
    name: NameStr
    email: EmailStr
    phone: PhoneStr
    address: Optional[AddressStr] = ""

    def normalized_address(self) -> str:
        return (self.address or "").strip()


class ContactOut(BaseModel):
    id: UUID
    name: str
    email: str
    phone: str
    address: Optional[str] = ""
    owner_id: UUID
    created_at: datetime

    model_config = {
        "from_attributes": True
    }


class UniquenessCheck(BaseModel):
    email_taken: bool = False
    phone_taken: bool = False

    @property
    def taken_fields(self) -> tuple[str, ...]:
        fields = []
        if self.email_taken:
            fields.append("email")
        if self.phone_taken:
            fields.append("phone")
        return tuple(fields)


class ValidationOut(BaseModel):
    valid: bool = True


class MessageOut(BaseModel):
    message: str
