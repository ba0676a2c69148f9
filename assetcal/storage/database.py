"""
Database engine and session management.

All stores share one ``Database``; each store method runs in its own
``session_scope`` so every write is an independent transaction.
"""

from __future__ import annotations

import contextlib
import logging
from pathlib import Path
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from assetcal.exceptions import StoreError
from assetcal.storage.tables import Base

logger = logging.getLogger(__name__)


class Database:
    """SQLAlchemy engine plus a session factory."""

    def __init__(self, url: str):
        """
        Initialize engine and session factory.

        Args:
            url: SQLAlchemy database URL (``sqlite:///path/to/file.db``)
        """
        self.url = url
        connect_args = {}
        parsed = make_url(url)
        if parsed.drivername.startswith("sqlite"):
            connect_args = {"check_same_thread": False, "timeout": 10.0}
            # Create the parent directory of file-backed SQLite databases
            if parsed.database and parsed.database != ":memory:":
                Path(parsed.database).parent.mkdir(parents=True, exist_ok=True)

        self.engine = create_engine(url, future=True, connect_args=connect_args)
        self.SessionLocal = sessionmaker(
            bind=self.engine,
            autoflush=False,
            autocommit=False,
            expire_on_commit=False,
            future=True,
        )

    def create_all(self) -> None:
        """Create all tables (no migrations)."""
        try:
            Base.metadata.create_all(bind=self.engine)
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to initialize database: {e}") from e
        logger.info(f"Database initialized: {self.engine.url.render_as_string()}")

    @contextlib.contextmanager
    def session_scope(self) -> Iterator[Session]:
        """
        Transactional session scope (for ``with`` blocks).

        Commits on success and rolls back on error. Integrity errors are
        re-raised unchanged so stores can translate them; any other database
        failure becomes a ``StoreError``.
        """
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except IntegrityError:
            session.rollback()
            raise
        except SQLAlchemyError as e:
            session.rollback()
            raise StoreError(f"Database error: {e}") from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def dispose(self) -> None:
        """Release pooled connections."""
        self.engine.dispose()
