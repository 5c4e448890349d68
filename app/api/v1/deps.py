from fastapi import Depends, Request
from asyncpg import Connection

from app.core.config import settings
from app.core.exceptions import NotAuthenticatedException
from app.core.security import token_from_request, verify_token
from app.db.session import get_db_connection
from app.repositories.contact_repo import ContactRepository
from app.repositories.user_repo import UserRepository
from app.schemas.auth_schema import TokenIdentity
from app.services.auth_services import AuthService
from app.services.contact_service import ContactService
from app.services.contact_validator import ContactUniquenessValidator


def get_user_repo(conn: Connection = Depends(get_db_connection)) -> UserRepository:
    return UserRepository(conn)


def get_contact_repo(conn: Connection = Depends(get_db_connection)) -> ContactRepository:
    return ContactRepository(conn)


def get_auth_service(user_repo: UserRepository = Depends(get_user_repo)) -> AuthService:
    return AuthService(user_repo)


def get_contact_service(contact_repo: ContactRepository = Depends(get_contact_repo)) -> ContactService:
    return ContactService(contact_repo, ContactUniquenessValidator(contact_repo))


async def get_current_identity(request: Request) -> TokenIdentity:
    token = token_from_request(
        request.headers.get("Authorization"),
        request.cookies.get(settings.AUTH_COOKIE_NAME),
    )
    identity = verify_token(token)
    if identity is None:
        raise NotAuthenticatedException()
    return identity


async def get_current_user(
        identity: TokenIdentity = Depends(get_current_identity),
        user_repo: UserRepository = Depends(get_user_repo),
) -> dict:
    user_data = await user_repo.get_by_id(identity.user_id)
    if user_data is None:
        raise NotAuthenticatedException()
    return user_data
