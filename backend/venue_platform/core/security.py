"""
Password hashing and JWT signing.

The signing key is owned by a TokenSigner built from settings and handed to
request handlers through a FastAPI dependency, so nothing reads the secret
from a module global.
"""

from datetime import datetime, timedelta, timezone
from functools import lru_cache

import jwt
from passlib.context import CryptContext

from venue_platform.core.config import get_settings


@lru_cache()
def _password_context() -> CryptContext:
    settings = get_settings()
    return CryptContext(
        schemes=["bcrypt"],
        deprecated="auto",
        bcrypt__rounds=settings.BCRYPT_ROUNDS,
    )


def hash_password(password: str) -> str:
    return _password_context().hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return _password_context().verify(plain_password, hashed_password)


class TokenSigner:
    """Issues and verifies HS256 access tokens carrying a user id in `sub`."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expire_minutes: int = 60,
        issuer: str | None = None,
        audience: str | None = None,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes
        self.issuer = issuer
        self.audience = audience

    def create_access_token(self, subject: str, expires_minutes: int | None = None) -> str:
        now = datetime.now(timezone.utc)
        expire = now + timedelta(minutes=expires_minutes or self.expire_minutes)
        payload = {"sub": subject, "iat": now, "exp": expire}
        if self.issuer:
            payload["iss"] = self.issuer
        if self.audience:
            payload["aud"] = self.audience
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def decode(self, token: str) -> dict:
        """Raises jwt.PyJWTError on a bad signature, expiry, issuer or audience."""
        return jwt.decode(
            token,
            self.secret_key,
            algorithms=[self.algorithm],
            issuer=self.issuer,
            audience=self.audience,
            options={"require": ["exp", "sub"]},
        )


@lru_cache()
def get_token_signer() -> TokenSigner:
    settings = get_settings()
    return TokenSigner(
        secret_key=settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
        expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
        issuer=settings.TOKEN_ISSUER,
        audience=settings.TOKEN_AUDIENCE,
    )
