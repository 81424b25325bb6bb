"""
Database configuration and session management

This module provides the SQLAlchemy setup for database connectivity.
The engine and session factory live on a Database object that the app
factory creates and stores on app.state, instead of module globals.
"""

import os
from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import NullPool, StaticPool

# Get database URL from environment variable
DATABASE_URL = os.getenv("DATABASE_URL", "postgresql+psycopg2://backend_user:changeme@db:5432/backend_db")

# Base class for ORM models
Base = declarative_base()


class Database:
    """
    Owns the engine and session factory for one database.

    Usage:
        database = Database("sqlite://")
        database.create_all()
        session = database.session()
    """

    def __init__(self, url: str = DATABASE_URL, echo: bool = False):
        self.url = url

        if url.startswith("sqlite"):
            # Single shared connection so in-memory databases survive across sessions
            self.engine = create_engine(
                url,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
                echo=echo,
            )
        else:
            # Using NullPool for better compatibility with containerized environments
            self.engine = create_engine(url, poolclass=NullPool, echo=echo)

        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def session(self):
        return self.SessionLocal()

    def create_all(self) -> None:
        """Create all tables registered on Base."""
        Base.metadata.create_all(bind=self.engine)

    def dispose(self) -> None:
        self.engine.dispose()

    def check_connection(self) -> bool:
        """
        Test database connectivity
        Returns True if connection successful, False otherwise
        """
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except Exception:
            return False


def get_db(request: Request):
    """
    Dependency injection for database sessions
    Usage in FastAPI endpoints:

    @app.get("/endpoint")
    def endpoint(db: Session = Depends(get_db)):
        # use db here
        pass
    """
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
