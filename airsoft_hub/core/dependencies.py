from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from airsoft_hub.database import get_db
from airsoft_hub.models.user import User
from airsoft_hub.core.security import TokenService, InvalidTokenError, get_token_service
from airsoft_hub.services.user_service import get_user_by_email

bearer_scheme = HTTPBearer(auto_error=False)


def get_token_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> dict:
    """
    Dependency that verifies the bearer token and returns its claims.
    Raises 401 when the header is missing or the token is invalid or expired.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return tokens.verify(credentials.credentials)
    except InvalidTokenError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )


def get_current_user(
    claims: dict = Depends(get_token_claims),
    db: Session = Depends(get_db)
) -> User:
    """
    Dependency to get the current authenticated user from the database.
    The token subject is the user's email.
    """
    user = get_user_by_email(db, claims.get("email") or claims.get("sub"))
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def get_optional_email(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> Optional[str]:
    """Email from a valid bearer token, or None. Never rejects the request."""
    if credentials is None:
        return None
    try:
        claims = tokens.verify(credentials.credentials)
    except InvalidTokenError:
        return None
    return claims.get("email") or claims.get("sub")
