"""
Create the inventory tables and seed default categories.

Run this from the project root:

    (.venv) python setup_db.py

The target database comes from DATABASE_URL; the database itself must
already exist (e.g. ``CREATE DATABASE dynasty_inventory`` in MySQL).
Categories listed in DEFAULT_CATEGORIES (comma separated) are inserted if
they are not there yet.
"""

from loguru import logger

from inventory.core.config import settings
from inventory.core.logging import setup_logging
from inventory.db.init_db import init_db, seed_initial_data
from inventory.db.session import SessionLocal


def main() -> None:
    setup_logging(settings.log_level)

    logger.info("Creating tables on {}", settings.database_url.split("@")[-1])
    init_db()

    db = SessionLocal()
    try:
        added = seed_initial_data(db, settings.default_categories)
        logger.info("Inserted {} new categories", added)
        logger.info("Database setup completed successfully")
    finally:
        db.close()


if __name__ == "__main__":
    main()
