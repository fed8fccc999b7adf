import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from turnero.core.config import CORS_ORIGINS, DATABASE_URL
from turnero.core.database import Base, SessionLocal, engine
from turnero.core.error_handlers import register_error_handlers
from turnero.core.logging_setup import configure_logging
from turnero.core.startup_checks import ensure_migrations_applied, validate_database_environment
from turnero.middleware.observability import ObservabilityMiddleware
import turnero.models  # registra los modelos antes del create_all

from turnero.routers.admin_appointments import router as admin_appointments_router
from turnero.routers.admin_auth import router as admin_auth_router
from turnero.routers.admin_blocks import router as admin_blocks_router
from turnero.routers.admin_metrics import router as admin_metrics_router
from turnero.routers.public_booking import router as public_booking_router
from turnero.services.admin_bootstrap import bootstrap_dev_admin

configure_logging()

logger = logging.getLogger(__name__)
BOOTSTRAP_PREFIX = "[ADMIN_BOOTSTRAP]"
DEFAULT_ADMIN_EMAIL = "admin@turnero.com.ar"
DEFAULT_ADMIN_NAME = "Admin"
DEFAULT_ADMIN_TENANT_SLUG = "barberia-demo"
REPO_ROOT = Path(__file__).resolve().parents[1]
ALEMBIC_CONFIG_PATH = Path(os.getenv("ALEMBIC_CONFIG", str(REPO_ROOT / "alembic.ini")))


@asynccontextmanager
async def lifespan(_: FastAPI):
    _startup_tasks()
    yield


app = FastAPI(
    title="Turnero API",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(ObservabilityMiddleware)
register_error_handlers(app)


def _bootstrap_initial_admin() -> None:
    password = os.getenv("DEV_ADMIN_PASSWORD", "").strip()
    if not password:
        logger.warning("%s skipped: configure DEV_ADMIN_PASSWORD.", BOOTSTRAP_PREFIX)
        return

    with SessionLocal() as db:
        bootstrap_dev_admin(
            db,
            tenant_slug=os.getenv("DEV_ADMIN_TENANT_SLUG", DEFAULT_ADMIN_TENANT_SLUG),
            email=os.getenv("DEV_ADMIN_EMAIL", "").strip() or DEFAULT_ADMIN_EMAIL,
            name=os.getenv("DEV_ADMIN_NAME", "").strip() or DEFAULT_ADMIN_NAME,
            password=password,
        )


def _startup_tasks() -> None:
    try:
        validate_database_environment()
        # En dev con SQLite se crea el esquema directo; en producción, migraciones.
        if DATABASE_URL.startswith("sqlite"):
            Base.metadata.create_all(bind=engine)
        ensure_migrations_applied(engine=engine, alembic_config_path=ALEMBIC_CONFIG_PATH)
        _bootstrap_initial_admin()
    except Exception:
        logger.exception("[STARTUP] failed")
        raise


# Routers
app.include_router(public_booking_router)
app.include_router(admin_auth_router)
app.include_router(admin_appointments_router)
app.include_router(admin_blocks_router)
app.include_router(admin_metrics_router)


@app.get("/")
def root():
    return {"status": "ok"}


@app.get("/health")
def health():
    return {"status": "healthy"}
