from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
import logging
from airsoft_hub.database import get_db
from airsoft_hub.models.user import User
from airsoft_hub.schemas.user import UserRegister, UserLogin, UserProfile, ProfileUpdate, Token
from airsoft_hub.core.security import TokenService, get_token_service, hash_password, verify_password
from airsoft_hub.core.dependencies import get_current_user
from airsoft_hub.services import user_service

router = APIRouter()
logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def _issue_token(tokens: TokenService, email: str) -> str:
    try:
        return tokens.issue(email)
    except Exception as e:
        logger.error(f"Error signing token: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to sign in"
        )


def _require_username(username: str) -> str:
    uname = (username or "").strip()
    if not uname:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Username is required")
    return uname


@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
async def register(
    details: UserRegister,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    """Create an account and sign the new user in"""
    email = user_service.normalize_email(details.email)
    password = details.password.strip()

    if not email or "@" not in email:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid email")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        )
    username = _require_username(details.username)

    try:
        if user_service.get_user_by_email(db, email):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already in use")
        if user_service.username_taken(db, username):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already taken")

        user_service.create_user(
            db,
            email=email,
            password_hash=hash_password(password),
            username=username,
            airsoft_club=details.airsoft_club,
        )
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Error creating account for {email}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create account"
        )

    logger.info(f"Registered user {email}")
    return {"token": _issue_token(tokens, email), "email": email}


@router.post("/login", response_model=Token)
async def login(
    details: UserLogin,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    email = user_service.normalize_email(details.email)
    password = details.password.strip()
    if not email or not password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email and password are required"
        )

    logger.info(f"Authenticating user with email: {email}")
    user = user_service.get_user_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        logger.warning(f"Failed login for {email}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password"
        )

    return {"token": _issue_token(tokens, email), "email": email}


@router.get("/me", response_model=UserProfile)
def me(current_user: User = Depends(get_current_user)):
    """Public profile of the bearer token's user"""
    return current_user


@router.put("/me", response_model=UserProfile)
def update_me(
    details: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Update username and airsoft club of the current user"""
    username = _require_username(details.username)
    try:
        if user_service.username_taken(db, username, exclude_user_id=current_user.id):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already taken")
        user = user_service.update_profile(db, current_user, username, details.airsoft_club)
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Error updating profile of {current_user.email}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update profile"
        )
    logger.info(f"Profile updated for {user.email}")
    return user
