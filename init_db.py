"""
Database initialization script
Creates all tables, adds columns missing from older databases,
promotes admins from ADMIN_EMAILS and seeds sample events into an empty table
"""
from sqlalchemy import text

from airsoft_hub.core import config
from airsoft_hub.database import engine, Base, SessionLocal
import airsoft_hub.models  # noqa: F401
from airsoft_hub.services.event_service import seed_events
from airsoft_hub.services.user_service import promote_admins
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Columns added after the first release; create_all does not alter existing tables
COLUMN_UPGRADES = [
    "ALTER TABLE events ADD COLUMN IF NOT EXISTS facebook_link TEXT",
    "ALTER TABLE events ADD COLUMN IF NOT EXISTS thumbnail TEXT",
    "ALTER TABLE events ADD COLUMN IF NOT EXISTS detailed_description TEXT",
    "ALTER TABLE events ADD COLUMN IF NOT EXISTS creator_email VARCHAR(255)",
    "ALTER TABLE events ADD COLUMN IF NOT EXISTS category VARCHAR(32) DEFAULT 'Skirmish'",
    "ALTER TABLE users ADD COLUMN IF NOT EXISTS username VARCHAR(50)",
    "ALTER TABLE users ADD COLUMN IF NOT EXISTS airsoft_club VARCHAR(100)",
    "ALTER TABLE users ADD COLUMN IF NOT EXISTS is_admin BOOLEAN NOT NULL DEFAULT false",
]


def upgrade_columns():
    """Apply COLUMN_UPGRADES. Only PostgreSQL supports ADD COLUMN IF NOT EXISTS."""
    if engine.dialect.name != "postgresql":
        logger.info(f"Skipping column upgrades on {engine.dialect.name}")
        return
    with engine.begin() as conn:
        for statement in COLUMN_UPGRADES:
            conn.execute(text(statement))
    logger.info(f"✓ Applied {len(COLUMN_UPGRADES)} column upgrades")


def init_db():
    """Initialize database with all tables"""
    try:
        logger.info("Creating all database tables...")
        Base.metadata.create_all(bind=engine)
        logger.info("✓ Database tables created successfully!")

        upgrade_columns()

        with SessionLocal() as db:
            promote_admins(db, config.admin_emails())
            inserted = seed_events(db)
        if inserted:
            logger.info(f"✓ Seeded {inserted} sample events")

        logger.info("Database initialization complete!")
        logger.info("You can now start the FastAPI server.")

    except Exception as e:
        logger.error(f"✗ Error initializing database: {str(e)}")
        raise


if __name__ == "__main__":
    init_db()
