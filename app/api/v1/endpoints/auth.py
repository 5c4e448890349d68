import logging

from fastapi import APIRouter, Depends, Response, status

from app.api.v1.deps import get_auth_service, get_current_user
from app.core.config import settings
from app.core.exceptions import InvalidCredentialsException
from app.schemas.auth_schema import LoginOut, UserCreate, UserLogin
from app.schemas.contact_schema import MessageOut
from app.schemas.user_schema import UserOut
from app.services.auth_services import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"], prefix="/api/auth")


@router.post("/register", response_model=UserOut, status_code=status.HTTP_201_CREATED)
async def register(user_in: UserCreate, auth_svc: AuthService = Depends(get_auth_service)):
    return await auth_svc.register_user(user_in)


@router.post("/login", response_model=LoginOut)
async def login(
        body: UserLogin,
        response: Response,
        auth_svc: AuthService = Depends(get_auth_service),
):
    user = await auth_svc.authenticate(body.email, body.password)
    if not user:
        raise InvalidCredentialsException()

    token = auth_svc.create_token_for_user(user)
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        path="/",
        samesite="lax",
    )
    logger.info("User %s logged in", user["id"])
    return LoginOut(token=token, user=UserOut.model_validate(user))


@router.post("/logout", response_model=MessageOut)
async def logout(response: Response):
    # Tokens are stateless: this only drops the cookie, the token itself stays valid until it expires.
    response.delete_cookie(key=settings.AUTH_COOKIE_NAME, path="/")
    return MessageOut(message="Logged out")


@router.get("/me", response_model=UserOut)
async def read_current_user(current_user: dict = Depends(get_current_user)):
    return current_user
