"""
Database configuration and session management.
"""

from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import Session, sessionmaker

Base = declarative_base()


class Database:
    """Engine and session factory for one process, owned by the app lifespan."""

    def __init__(self, url: str):
        self.url = url
        # Dev fallback when running without Postgres uses a local SQLite file.
        if url.startswith("sqlite:"):
            self.engine = create_engine(url, connect_args={"check_same_thread": False})
        else:
            self.engine = create_engine(url, pool_pre_ping=True)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def init_db(self):
        """Initialize database tables."""
        # Import models so SQLAlchemy registers all tables on Base.metadata
        from travel_admin import models  # noqa: F401
        Base.metadata.create_all(bind=self.engine)

    def session(self) -> Session:
        return self.SessionLocal()

    def dispose(self):
        self.engine.dispose()


def get_db(request: Request) -> Iterator[Session]:
    """Dependency for getting database session."""
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
