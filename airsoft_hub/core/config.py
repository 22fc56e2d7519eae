import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Listen address for `python main.py`, format host:port (host may be empty)
APP_ADDRESS = os.getenv("APP_ADDRESS", ":8080")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Token signing
AUTH_JWT_SECRET = os.getenv("AUTH_JWT_SECRET", "dev-secret-change-me")
ACCESS_TOKEN_EXPIRE_DAYS = int(os.getenv("ACCESS_TOKEN_EXPIRE_DAYS", "30"))

# Thumbnails are written here and served under /uploads
UPLOAD_DIR = os.getenv("UPLOAD_DIR", "uploads")
MAX_THUMBNAIL_BYTES = 5 * 1024 * 1024

# Comma-separated list of emails promoted to admin at startup
ADMIN_EMAILS = os.getenv("ADMIN_EMAILS", "")

EVENT_CATEGORIES = ("24h", "12h", "Skirmish")
DEFAULT_EVENT_CATEGORY = "Skirmish"
DEFAULT_AIRSOFT_CLUB = "No Club/Freelancer"


def parse_address(address: str) -> tuple:
    """Split a host:port listen address. An empty host means all interfaces."""
    host, _, port = address.rpartition(":")
    if not port:
        port = "8080"
    return host or "0.0.0.0", int(port)


def admin_emails() -> list:
    return [e.strip().lower() for e in ADMIN_EMAILS.split(",") if e.strip()]
