"""SQLModel database handle.

The engine lives on an explicitly constructed ``Database`` object that is
passed to the repository, instead of a module-level global.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from sqlalchemy import text
from sqlmodel import Session, SQLModel, create_engine

DB_PATH = Path(__file__).resolve().parent.parent / "revenue.db"
DEFAULT_DATABASE_URL = f"sqlite:///{DB_PATH}"

logger = logging.getLogger(__name__)


class Database:
    def __init__(self, url: Optional[str] = None, *, echo: bool = False):
        self.url = url or DEFAULT_DATABASE_URL
        connect_args = {"check_same_thread": False} if self.url.startswith("sqlite") else {}
        self.engine = create_engine(self.url, echo=echo, connect_args=connect_args)

    def init_db(self) -> None:
        """Create tables if they do not exist."""
        from . import models  # noqa: F401  # ensure SQLModel metadata is loaded

        SQLModel.metadata.create_all(self.engine)
        logger.debug("Database schema ready at %s", self.engine.url)

    def session(self) -> Session:
        return Session(self.engine)

    def ping(self) -> None:
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    def dispose(self) -> None:
        self.engine.dispose()
