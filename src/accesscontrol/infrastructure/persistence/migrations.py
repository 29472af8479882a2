"""Alembic migration runner for the access_control schema."""

import asyncio
import logging
from pathlib import Path

from alembic import command
from alembic.config import Config

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[4]


def sqlalchemy_url(database_url: str) -> str:
    """Point a plain postgresql:// URL at the psycopg 3 SQLAlchemy driver."""
    for prefix in ("postgresql://", "postgres://"):
        if database_url.startswith(prefix):
            return "postgresql+psycopg://" + database_url[len(prefix):]
    return database_url


def alembic_config(database_url: str) -> Config:
    config_path = PROJECT_ROOT / "alembic.ini"
    if not config_path.exists():
        raise FileNotFoundError(f"Alembic configuration not found at {config_path}")
    config = Config(str(config_path))
    # ConfigParser interpolation treats % specially
    config.set_main_option("sqlalchemy.url", sqlalchemy_url(database_url).replace("%", "%%"))
    config.attributes["configure_logger"] = False
    return config


def upgrade_head(database_url: str) -> None:
    """Apply all pending migrations."""
    logger.info("Applying database migrations")
    command.upgrade(alembic_config(database_url), "head")


async def upgrade_head_async(database_url: str) -> None:
    """Apply migrations without blocking the event loop."""
    await asyncio.to_thread(upgrade_head, database_url)
