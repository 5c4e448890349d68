from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import EmailStr

from app.api.v1.deps import get_contact_service, get_current_identity
from app.core.exceptions import ContactNotFound, DuplicateContactField
from app.schemas.auth_schema import TokenIdentity
from app.schemas.contact_schema import ContactIn, ContactOut, MessageOut, PhoneStr, ValidationOut
from app.services.contact_service import ContactService

router = APIRouter(prefix="/api/contacts", tags=["contacts"])


def _not_found(e: ContactNotFound) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail={"error": str(e)})


def _duplicate(e: DuplicateContactField, status_code: int = status.HTTP_400_BAD_REQUEST) -> HTTPException:
    return HTTPException(status_code=status_code, detail={"error": str(e), "field": e.field})


@router.get("", response_model=List[ContactOut])
async def list_contacts(
        identity: TokenIdentity = Depends(get_current_identity),
        contact_service: ContactService = Depends(get_contact_service),
):
    return await contact_service.list_contacts(identity.user_id)


@router.post("", response_model=ContactOut, status_code=status.HTTP_201_CREATED)
async def create_contact(
        body: ContactIn,
        identity: TokenIdentity = Depends(get_current_identity),
        contact_service: ContactService = Depends(get_contact_service),
):
    try:
        return await contact_service.create_contact(identity.user_id, body)
    except DuplicateContactField as e:
        raise _duplicate(e)


@router.get("/validate", response_model=ValidationOut)
async def validate_contact(
        email: Optional[EmailStr] = Query(None),
        phone: Optional[PhoneStr] = Query(None),
        exclude_id: Optional[UUID] = Query(None, alias="excludeId"),
        identity: TokenIdentity = Depends(get_current_identity),
        contact_service: ContactService = Depends(get_contact_service),
):
    try:
        await contact_service.validate_fields(identity.user_id, email=email, phone=phone, exclude_id=exclude_id)
    except DuplicateContactField as e:
        raise _duplicate(e, status_code=status.HTTP_409_CONFLICT)
    return ValidationOut(valid=True)


@router.put("/{contact_id}", response_model=ContactOut)
async def update_contact(
        contact_id: UUID,
        body: ContactIn,
        identity: TokenIdentity = Depends(get_current_identity),
        contact_service: ContactService = Depends(get_contact_service),
):
    try:
        return await contact_service.update_contact(identity.user_id, contact_id, body)
    except ContactNotFound as e:
        raise _not_found(e)
    except DuplicateContactField as e:
        raise _duplicate(e)


@router.delete("/{contact_id}", response_model=MessageOut)
async def delete_contact(
        contact_id: UUID,
        identity: TokenIdentity = Depends(get_current_identity),
        contact_service: ContactService = Depends(get_contact_service),
):
    try:
        await contact_service.delete_contact(identity.user_id, contact_id)
    except ContactNotFound as e:
        raise _not_found(e)
    return MessageOut(message="Contact deleted")
