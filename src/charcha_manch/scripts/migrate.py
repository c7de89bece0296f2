# src/charcha_manch/scripts/migrate.py
"""Apply Alembic migrations to the configured database."""
from __future__ import annotations

import logging
import os

from alembic import command
from alembic.config import Config

from charcha_manch.core.log_config import configure_logging
from charcha_manch.core.settings import settings

MIGRATIONS_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..", "..", "migrations"))

logger = logging.getLogger(__name__)


def build_config() -> Config:
    """Return an Alembic config pointed at the project's migrations folder."""
    cfg = Config()
    cfg.set_main_option("script_location", MIGRATIONS_DIR)
    cfg.set_main_option("sqlalchemy.url", settings.database_url_sync)
    return cfg


def run_upgrade_head() -> None:
    logger.info("Upgrading %s to head", settings.database_url_sync)
    command.upgrade(build_config(), "head")


if __name__ == "__main__":
    configure_logging()
    run_upgrade_head()
