# src/libs/upload-common/upload_common/config.py
import os
from dotenv import load_dotenv

# Load environment variables from a .env file for local development.
load_dotenv()


def _optional_float(name: str, default: str):
    raw = os.getenv(name, default)
    if raw is None or raw.strip() == "":
        return None
    value = float(raw)
    return value if value > 0 else None


# Database Configurations
POSTGRES_USER = os.getenv("POSTGRES_USER", "user")
POSTGRES_PASSWORD = os.getenv("POSTGRES_PASSWORD", "password")
POSTGRES_DB = os.getenv("POSTGRES_DB", "uploads_db")
POSTGRES_HOST = os.getenv("POSTGRES_HOST", "postgres")
POSTGRES_PORT = os.getenv("POSTGRES_PORT", "5432")

# Upload query behaviour
UPLOAD_QUERY_DEFAULT_PAGE_SIZE = int(os.getenv("UPLOAD_QUERY_DEFAULT_PAGE_SIZE", "20"))
UPLOAD_QUERY_MAX_PAGE_SIZE = int(os.getenv("UPLOAD_QUERY_MAX_PAGE_SIZE", "1000"))
# Seconds allowed for the count + page round trip. 0 or empty disables the deadline.
UPLOAD_QUERY_TIMEOUT_SECONDS = _optional_float("UPLOAD_QUERY_TIMEOUT_SECONDS", "10")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
