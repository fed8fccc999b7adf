import os
from dotenv import load_dotenv

# Carga el .env de la raíz del proyecto
load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./turnero.db")
ENV = os.getenv("ENV", "dev")
ENV_NORMALIZED = ENV.lower()
IS_DEV = ENV_NORMALIZED in {"dev", "development", "local"}
IS_PROD = ENV_NORMALIZED in {"prod", "production"}
IS_TEST = ENV_NORMALIZED == "test"
IS_LOCAL = IS_DEV or IS_TEST

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Agenda
DEFAULT_TIMEZONE = os.getenv("DEFAULT_TIMEZONE", "America/Argentina/Buenos_Aires").strip()
SLOT_STEP_MINUTES = int(os.getenv("SLOT_STEP_MINUTES", "30"))
MAX_RECURRING_WEEKS = int(os.getenv("MAX_RECURRING_WEEKS", "52"))
DEFAULT_OPENING_HOUR = int(os.getenv("DEFAULT_OPENING_HOUR", "9"))
DEFAULT_CLOSING_HOUR = int(os.getenv("DEFAULT_CLOSING_HOUR", "18"))

# CORS
_cors_env = os.getenv("CORS_ORIGINS", "")
CORS_ORIGINS = [origin.strip() for origin in _cors_env.split(",") if origin.strip() and origin.strip() != "*"]

if not CORS_ORIGINS and IS_LOCAL:
    CORS_ORIGINS = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:3000",
    ]

# Sesión de admin (cookie firmada)
ADMIN_SESSION_SECRET = os.getenv("ADMIN_SESSION_SECRET", "dev-secret-change-me" if IS_LOCAL else "")
ADMIN_SESSION_MAX_AGE_SECONDS = int(os.getenv("ADMIN_SESSION_MAX_AGE_SECONDS", "604800"))
ADMIN_SESSION_COOKIE_SECURE = os.getenv(
    "ADMIN_SESSION_COOKIE_SECURE",
    "0" if IS_LOCAL else "1",
).strip().lower() in {"1", "true", "yes", "on"}
ADMIN_SESSION_COOKIE_SAMESITE = os.getenv(
    "ADMIN_SESSION_COOKIE_SAMESITE",
    "lax" if IS_LOCAL else "none",
).strip().lower()
if ADMIN_SESSION_COOKIE_SAMESITE not in {"lax", "strict", "none"}:
    ADMIN_SESSION_COOKIE_SAMESITE = "lax" if IS_LOCAL else "none"
ADMIN_SESSION_COOKIE_DOMAIN = os.getenv("ADMIN_SESSION_COOKIE_DOMAIN", "").strip() or None
