"""
Unit tests for password hashing and session tokens
"""
import uuid
from datetime import timedelta

from jose import jwt

from app.core.config import settings
from app.core.security import (
    create_access_token,
    hash_password,
    token_from_request,
    verify_password,
    verify_token,
)


class TestPasswordHashing:

    def test_hash_then_verify(self):
        hashed = hash_password("password123")
        assert hashed != "password123"
        assert verify_password("password123", hashed) is True

    def test_wrong_password_fails(self):
        hashed = hash_password("password123")
        assert verify_password("password124", hashed) is False

    def test_salt_is_random(self):
        assert hash_password("same-password") != hash_password("same-password")

    def test_malformed_hash_fails_closed(self):
        assert verify_password("password123", "not-a-bcrypt-hash") is False

    def test_empty_hash_fails_closed(self):
        assert verify_password("password123", "") is False
        assert verify_password("password123", None) is False

    def test_long_password_round_trips(self):
        password = "x" * 200
        assert verify_password(password, hash_password(password)) is True
        assert verify_password("x" * 199, hash_password(password)) is False


class TestSessionToken:

    def test_issue_then_verify(self):
        user_id = uuid.uuid4()
        token = create_access_token(user_id=str(user_id), email="ana@example.com")

        identity = verify_token(token)

        assert identity is not None
        assert identity.user_id == user_id
        assert identity.email == "ana@example.com"

    def test_default_lifetime_is_seven_days(self):
        token = create_access_token(user_id=str(uuid.uuid4()), email="ana@example.com")
        claims = jwt.get_unverified_claims(token)
        assert claims["exp"] - claims["iat"] == 7 * 24 * 3600

    def test_expired_token_has_no_identity(self):
        token = create_access_token(
            user_id=str(uuid.uuid4()),
            email="ana@example.com",
            expires_delta=timedelta(seconds=-1),
        )
        assert verify_token(token) is None

    def test_token_signed_with_other_secret_is_rejected(self):
        claims = jwt.get_unverified_claims(
            create_access_token(user_id=str(uuid.uuid4()), email="ana@example.com")
        )
        forged = jwt.encode(claims, "some-other-secret", algorithm=settings.ALGORITHM)
        assert verify_token(forged) is None

    def test_garbage_token_is_rejected(self):
        assert verify_token("not.a.token") is None
        assert verify_token("") is None
        assert verify_token(None) is None

    def test_token_without_identity_claims_is_rejected(self):
        token = jwt.encode({"sub": "not-a-uuid"}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
        assert verify_token(token) is None


class TestTokenFromRequest:

    def test_bearer_header(self):
        assert token_from_request("Bearer abc", None) == "abc"

    def test_cookie_only(self):
        assert token_from_request(None, "from-cookie") == "from-cookie"

    def test_header_wins_over_cookie(self):
        assert token_from_request("Bearer from-header", "from-cookie") == "from-header"

    def test_non_bearer_header_falls_back_to_cookie(self):
        assert token_from_request("Basic dXNlcjpwYXNz", "from-cookie") == "from-cookie"

    def test_nothing(self):
        assert token_from_request(None, None) is None
        assert token_from_request("Bearer ", None) is None
