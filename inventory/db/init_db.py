"""
Database initialization helpers.

Models are imported here so their tables get registered on Base.metadata
before create_all runs.
"""

from typing import Iterable

from loguru import logger
from sqlalchemy.orm import Session

from inventory.db.session import engine
from inventory.models.base import Base
from inventory.models.category import Category
from inventory.models import product, user  # noqa: F401


def init_db(bind=None) -> None:
    """
    Create all tables based on SQLAlchemy models.
    """
    Base.metadata.create_all(bind=bind if bind is not None else engine)


def seed_initial_data(db: Session, categories: Iterable[str] = ()) -> int:
    """
    Insert any of ``categories`` that are not in the table yet.

    Returns the number of rows added.
    """
    existing = {name for (name,) in db.query(Category.name).all()}
    added = 0
    for raw in categories:
        name = raw.strip()
        if not name or name in existing:
            continue
        db.add(Category(name=name))
        existing.add(name)
        added += 1
    db.commit()
    if added:
        logger.info("Seeded {} categories", added)
    return added
