import logging
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from airsoft_hub.core import config
from airsoft_hub.models.user import User

logger = logging.getLogger(__name__)


def normalize_email(raw: Optional[str]) -> str:
    return (raw or "").strip().lower()


def normalize_club(raw: Optional[str]) -> str:
    club = (raw or "").strip()
    return club or config.DEFAULT_AIRSOFT_CLUB


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == normalize_email(email)).first()


def username_taken(db: Session, username: str, exclude_user_id: int = 0) -> bool:
    uname = (username or "").strip().lower()
    if not uname:
        return False
    existing = db.query(User).filter(
        func.lower(User.username) == uname,
        User.id != exclude_user_id,
    ).first()
    return existing is not None


def create_user(db: Session, email: str, password_hash: str, username: str, airsoft_club: Optional[str]) -> User:
    user = User(
        email=normalize_email(email),
        username=username.strip(),
        airsoft_club=normalize_club(airsoft_club),
        password_hash=password_hash,
        is_admin=normalize_email(email) in config.admin_emails(),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def update_profile(db: Session, user: User, username: str, airsoft_club: Optional[str]) -> User:
    user.username = username.strip()
    user.airsoft_club = normalize_club(airsoft_club)
    db.commit()
    db.refresh(user)
    return user


def promote_admins(db: Session, emails: List[str]) -> int:
    """Set is_admin for every listed email that has an account. Returns rows updated."""
    if not emails:
        return 0
    updated = db.query(User).filter(
        func.lower(User.email).in_([normalize_email(e) for e in emails])
    ).update({User.is_admin: True}, synchronize_session=False)
    db.commit()
    if updated:
        logger.info(f"Promoted {updated} user(s) to admin")
    return updated
