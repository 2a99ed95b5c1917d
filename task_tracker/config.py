from pathlib import Path
import os

from dotenv import load_dotenv

# Load environment variables from repo root and package-level .env (if present).
REPO_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(REPO_ROOT / ".env")
load_dotenv(Path(__file__).resolve().parent / ".env")

DEFAULT_SECRET_KEY = "change-me"

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./task_tracker.db")
SECRET_KEY = os.getenv("SECRET_KEY", DEFAULT_SECRET_KEY)
JWT_ALGORITHM = "HS256"
# Fixed token lifetime; tokens cannot be revoked before this elapses.
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(7 * 24 * 60)))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR = os.getenv("LOG_DIR") or None

_cors_origins = os.getenv("CORS_ORIGINS", "http://localhost:3000")
CORS_ORIGINS = [origin.strip() for origin in _cors_origins.split(",") if origin.strip()]

# Field limits
PASSWORD_MIN_LENGTH = 6
# bcrypt only reads the first 72 bytes of a password
PASSWORD_MAX_BYTES = 72
NAME_MAX_LENGTH = 50
BIO_MAX_LENGTH = 500
TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 1000
TAG_MAX_LENGTH = 30
