"""
Password hashing and bearer token helpers.

Handlers never touch the signing library directly: they ask for a
TokenService through the get_token_service dependency, so the signing
mechanism can be replaced (or overridden in tests) in one place.
"""
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Dict, Any

from jose import jwt, JWTError
from passlib.context import CryptContext

from airsoft_hub.core import config

pwd_context = CryptContext(
    schemes=["argon2"],
    default="argon2",
    deprecated="auto",
)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


# Password hashing configuration and verification
def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


class InvalidTokenError(Exception):
    """Raised when a token is malformed, badly signed or expired."""


class TokenService(ABC):
    """Issues and verifies bearer tokens that identify a user by email."""

    @abstractmethod
    def issue(self, email: str) -> str:
        ...

    @abstractmethod
    def verify(self, token: str) -> Dict[str, Any]:
        ...


class JWTTokenService(TokenService):
    """HS256 JSON Web Tokens carrying the email as both subject and claim."""

    algorithm = "HS256"

    def __init__(self, secret: str, expires_delta: timedelta):
        self.secret = secret
        self.expires_delta = expires_delta

    def issue(self, email: str) -> str:
        now = datetime.now(timezone.utc)
        claims = {
            "sub": email,
            "email": email,
            "iat": int(now.timestamp()),
            "exp": int((now + self.expires_delta).timestamp()),
        }
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Dict[str, Any]:
        """
        Check signature and expiry and return the claims.
        Raises InvalidTokenError when either check fails or the subject is missing.
        """
        try:
            claims = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError as e:
            raise InvalidTokenError(str(e)) from e
        if not claims.get("sub"):
            raise InvalidTokenError("Token has no subject")
        return claims


token_service = JWTTokenService(
    secret=config.AUTH_JWT_SECRET,
    expires_delta=timedelta(days=config.ACCESS_TOKEN_EXPIRE_DAYS),
)


def get_token_service() -> TokenService:
    return token_service
