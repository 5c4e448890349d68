import hashlib
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt
from passlib.context import CryptContext

from app.core.config import settings
from app.schemas.auth_schema import TokenIdentity

logger = logging.getLogger(__name__)

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def _prehash(password: str) -> str:
    # bcrypt only looks at the first 72 bytes; a hex sha256 digest is 64.
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


def hash_password(password: str) -> str:
    return pwd_context.hash(_prehash(password))


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a password against a stored hash.

    A malformed or empty stored hash counts as a mismatch.
    """
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(_prehash(plain_password), hashed_password)
    except (ValueError, TypeError):
        logger.warning("Stored password hash could not be identified")
        return False


def create_access_token(user_id: str, email: str, expires_delta: Optional[timedelta] = None) -> str:
    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode = {
        "sub": str(user_id),
        "email": email,
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> dict:
    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    return payload


def verify_token(token: Optional[str]) -> Optional[TokenIdentity]:
    """Decode a token into the caller identity, or None when it is unusable.

    Bad signatures, malformed tokens, expired tokens and payloads missing
    the identity claims all yield None.
    """
    if not token:
        return None
    try:
        payload = decode_access_token(token)
        return TokenIdentity(user_id=payload["sub"], email=payload["email"])
    except Exception:
        return None


def token_from_request(authorization: Optional[str], cookie: Optional[str]) -> Optional[str]:
    """Pick the token out of an Authorization header or the auth cookie.

    The header wins when both are present.
    """
    if authorization and authorization.lower().startswith("bearer "):
        token = authorization.split(" ", 1)[1].strip()
        if token:
            return token
    if cookie:
        return cookie
    return None
