"""Command-line interface for database management, run out-of-band from the API."""

import asyncio
import logging
import sys

import typer
from alembic import command
from alembic.config import Config as AlembicConfig
from typing_extensions import Annotated

from forum_service.config.settings import PROJECT_ROOT_DIR, settings
from forum_service.core.schema import ensure_schema
from forum_service.utils.db_health import check_db_connection
from forum_service.utils.db_session import dispose_engine, get_async_engine

app = typer.Typer(help="Forum database management commands")
logger = logging.getLogger(__name__)

ALEMBIC_INI_PATH = PROJECT_ROOT_DIR / "alembic.ini"


def setup_logging(log_level: str = "INFO") -> None:
    """Set up basic logging configuration."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler()],
    )


async def _check() -> bool:
    try:
        return await check_db_connection()
    finally:
        await dispose_engine()


async def _create_schema() -> None:
    try:
        await ensure_schema(get_async_engine())
    finally:
        await dispose_engine()


@app.command("check")
def check_connection(
    loglevel: Annotated[str, typer.Option("--loglevel", "-l", help="Logging level")] = "INFO",
) -> None:
    """Test the PostgreSQL connection."""
    setup_logging(loglevel)
    logger.info(f"Connecting to PostgreSQL at {settings.DB_HOST}:{settings.DB_PORT}/{settings.DB_NAME}")

    if not asyncio.run(_check()):
        logger.error("Connection failed! Check PostgreSQL credentials and connectivity.")
        sys.exit(1)
    logger.info("Connected to PostgreSQL successfully")


@app.command("create-schema")
def create_schema(
    loglevel: Annotated[str, typer.Option("--loglevel", "-l", help="Logging level")] = "INFO",
) -> None:
    """Create missing tables (idempotent). Does not alter existing tables."""
    setup_logging(loglevel)
    try:
        asyncio.run(_create_schema())
    except Exception as e:
        logger.error(f"Failed to create schema: {e}")
        sys.exit(1)
    logger.info("Schema is in place")


@app.command("migrate")
def migrate(
    revision: Annotated[str, typer.Argument(help="Target Alembic revision")] = "head",
    loglevel: Annotated[str, typer.Option("--loglevel", "-l", help="Logging level")] = "INFO",
) -> None:
    """Apply Alembic migrations up to REVISION."""
    setup_logging(loglevel)
    if not ALEMBIC_INI_PATH.exists():
        logger.error(f"Alembic configuration not found at {ALEMBIC_INI_PATH}")
        sys.exit(1)

    alembic_cfg = AlembicConfig(str(ALEMBIC_INI_PATH))
    alembic_cfg.set_main_option("script_location", str(PROJECT_ROOT_DIR / "alembic"))
    logger.info(f"Upgrading database to revision {revision}")
    command.upgrade(alembic_cfg, revision)
    logger.info("Migrations applied")


if __name__ == "__main__":
    app()
