"""Checks run once at startup, before the app accepts requests."""

from __future__ import annotations

import logging
from pathlib import Path

from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy.engine import Engine

from turnero.core.config import DATABASE_URL, ENV_NORMALIZED, IS_PROD, IS_TEST

logger = logging.getLogger(__name__)
MIGRATIONS_PREFIX = "[MIGRATIONS]"


class StartupCheckError(RuntimeError):
    pass


def validate_database_environment(database_url: str = DATABASE_URL) -> None:
    if IS_PROD and database_url.startswith("sqlite"):
        logger.critical("%s sqlite configured in env=%s", MIGRATIONS_PREFIX, ENV_NORMALIZED)
        raise StartupCheckError("SQLite no está permitido en producción")


def _script_heads(alembic_config_path: Path) -> set[str]:
    if not alembic_config_path.exists():
        raise StartupCheckError(f"No se encontró la configuración de Alembic en {alembic_config_path}")
    return set(ScriptDirectory.from_config(Config(str(alembic_config_path))).get_heads())


def _database_heads(engine: Engine) -> set[str]:
    with engine.connect() as connection:
        return set(MigrationContext.configure(connection).get_current_heads())


def ensure_migrations_applied(*, engine: Engine, alembic_config_path: Path) -> None:
    """The database must sit exactly at the Alembic heads; SQLite and test runs are exempt."""
    if IS_TEST or DATABASE_URL.startswith("sqlite"):
        logger.info("%s check skipped env=%s", MIGRATIONS_PREFIX, ENV_NORMALIZED)
        return

    expected = _script_heads(alembic_config_path)
    current = _database_heads(engine)
    if not current:
        logger.critical("%s database has no alembic revision", MIGRATIONS_PREFIX)
        raise StartupCheckError("La base no tiene migraciones aplicadas; correr `alembic upgrade head`")

    if current != expected:
        logger.critical(
            "%s out of date current=%s expected=%s",
            MIGRATIONS_PREFIX,
            sorted(current),
            sorted(expected),
        )
        raise StartupCheckError("Hay migraciones pendientes; correr `alembic upgrade head`")

    logger.info("%s at head revision=%s", MIGRATIONS_PREFIX, ",".join(sorted(current)))
