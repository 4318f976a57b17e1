"""Schema Migrations: applies the ordered Alembic revision set at startup.

Invariants:
    - upgrade to "head" is idempotent: no-op when the schema is current
    - Script location resolved relative to the package, not the working directory
"""

import logging
from pathlib import Path

from alembic import command
from alembic.config import Config

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parent.parent / "migrations"


def build_alembic_config(database_url: str) -> Config:
    config = Config()
    config.set_main_option("script_location", str(MIGRATIONS_DIR))
    # ConfigParser interpolation treats % as a directive
    config.set_main_option("sqlalchemy.url", database_url.replace("%", "%%"))
    return config


def run_migrations(database_url: str) -> None:
    """Upgrade the database to the latest revision.

    Blocking: env.py drives its own event loop, so call this from a worker
    thread when an event loop is already running.
    """
    command.upgrade(build_alembic_config(database_url), "head")
    logger.info("Migrations executed")
