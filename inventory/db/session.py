from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from inventory.core.config import settings

SQLALCHEMY_DATABASE_URL = settings.database_url


def build_engine(database_url: str, pool_size: int = settings.db_pool_size):
    # SQLite (tests, local runs) has no use for a sized connection pool
    if database_url.startswith("sqlite"):
        return create_engine(database_url, connect_args={"check_same_thread": False})
    return create_engine(
        database_url,
        pool_size=pool_size,
        max_overflow=0,
        pool_pre_ping=True,
    )


engine = build_engine(SQLALCHEMY_DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


# ----------------------------------------------------
# DB Session Dependency
# ----------------------------------------------------
def get_db():
    db: Session = SessionLocal()
    try:
        yield db
    finally:
        db.close()
