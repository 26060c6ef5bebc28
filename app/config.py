import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(override=False)

SECRET_KEY = os.environ.get("SECRET_KEY") or os.environ.get("JWT_SECRET", "change-me-in-production")
ALGORITHM = os.environ.get("ALGORITHM", "HS256")
# sessions last 24 hours unless overridden
ACCESS_TOKEN_EXPIRE_MINUTES = float(os.environ.get("ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 24))

# Default to local SQLite for dev/tests; override via env in Docker/Prod
DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///./tasklist.db")

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
LOG_FILE = os.environ.get("LOG_FILE") or None

ALLOWED_ORIGINS = [o.strip() for o in os.environ.get("ALLOWED_ORIGINS", "*").split(",") if o.strip()]

HOST = os.environ.get("HOST", "127.0.0.1")
PORT = int(os.environ.get("PORT", 5000))

CLIENT_BASE_URL = os.environ.get("CLIENT_BASE_URL", f"http://{HOST}:{PORT}")
CLIENT_SESSION_PATH = Path(
    os.environ.get("CLIENT_SESSION_PATH", "~/.tasklist/session.json")
).expanduser()
