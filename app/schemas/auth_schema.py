from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, constr

from app.schemas.user_schema import UserOut


class TokenIdentity(BaseModel):
    """Identity carried by a verified session token."""
    user_id: UUID
    email: str


class UserLogin(BaseModel):
    email: EmailStr
    password: constr(min_length=1)


class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    name: constr(strip_whitespace=True, min_length=1, max_length=120)


class LoginOut(BaseModel):
    token: str
    user: UserOut
