"""
Database connection handle
"""
from typing import Generator

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
import structlog

from tailorshop.core.exceptions import PersistenceError
from tailorshop.models import Base

logger = structlog.get_logger()


class Database:
    """Engine and session factory shared by every request of one application"""

    def __init__(self, database_url: str):
        connect_args = {}
        if database_url.startswith("sqlite"):
            # Requests are served from more than one thread
            connect_args["check_same_thread"] = False

        self.engine = create_engine(database_url, connect_args=connect_args, pool_pre_ping=True)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def create_tables(self) -> None:
        """Create missing tables"""
        try:
            Base.metadata.create_all(bind=self.engine)
        except SQLAlchemyError as e:
            raise PersistenceError("Failed to create tables") from e

    def check_connection(self) -> None:
        """Borrow one connection and run a trivial query"""
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            raise PersistenceError("Database is unreachable") from e

    def session(self) -> Session:
        return self.SessionLocal()

    def dispose(self) -> None:
        self.engine.dispose()


def get_db(request: Request) -> Generator[Session, None, None]:
    """Yield a session for one request and always release it"""
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
