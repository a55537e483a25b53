import os
from dotenv import load_dotenv

load_dotenv()

# --- Database ---
POSTGRES_USER = os.getenv("POSTGRES_USER")
POSTGRES_PASSWORD = os.getenv("POSTGRES_PASSWORD")
POSTGRES_HOST = os.getenv("POSTGRES_HOST", "db")
POSTGRES_PORT = os.getenv("POSTGRES_PORT", "5432")
POSTGRES_DB = os.getenv("POSTGRES_DB")

DATABASE_URL = os.getenv(
    "DATABASE_URL",
    f"postgresql+asyncpg://{POSTGRES_USER}:{POSTGRES_PASSWORD}@{POSTGRES_HOST}:{POSTGRES_PORT}/{POSTGRES_DB}",
)
SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() in ("1", "true", "yes")

# --- JWT ---
SECRET_KEY = os.getenv("SECRET_KEY", "change-me-character-manager-signing-key-0123456789")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS512")
JWT_ISSUER = os.getenv("JWT_ISSUER", "CharacterManagerApi")
JWT_AUDIENCE = os.getenv("JWT_AUDIENCE", "CharacterManagerClient")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "10"))
REFRESH_TOKEN_EXPIRE_DAYS = int(os.getenv("REFRESH_TOKEN_EXPIRE_DAYS", "7"))

# --- HTTP ---
# Angular dev server by default
ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv("ALLOWED_ORIGINS", "http://localhost:4200").split(",")
    if origin.strip()
]

# --- Admin console ---
ADMIN_SESSION_SECRET = os.getenv("ADMIN_SESSION_SECRET", "change-me-admin-session-secret")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
