from sqlalchemy import Column, Integer, String, Boolean, DateTime, Index, func, text

from airsoft_hub.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)  # Always stored lower-cased
    username = Column(String(50), nullable=True)
    airsoft_club = Column(String(100), nullable=True)
    is_admin = Column(Boolean, nullable=False, default=False, server_default=text("false"))
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


# Usernames are unique case-insensitively; empty usernames are ignored
Index(
    "users_username_unique_idx",
    func.lower(User.username),
    unique=True,
    postgresql_where=text("username IS NOT NULL AND username <> ''"),
    sqlite_where=text("username IS NOT NULL AND username <> ''"),
)
