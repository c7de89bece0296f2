# src/charcha_manch/scripts/init_db.py
"""Create (or recreate) every table directly from the ORM metadata."""
from __future__ import annotations

import argparse
import logging

from charcha_manch.core.log_config import configure_logging
from charcha_manch.core.settings import settings
from charcha_manch.db.session import create_tables, drop_tables

logger = logging.getLogger(__name__)


def main() -> None:
    parser = argparse.ArgumentParser(description="Initialise the configured database")
    parser.add_argument(
        "--drop-tables",
        action="store_true",
        help="Drop every table before creating them again.",
    )
    args = parser.parse_args()

    configure_logging()
    if args.drop_tables:
        logger.warning("Dropping all tables in %s", settings.effective_database_url)
        drop_tables()
    create_tables()
    logger.info("Database initialised at %s", settings.effective_database_url)


if __name__ == "__main__":
    main()
