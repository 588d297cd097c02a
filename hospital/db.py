from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from .config import DB_PATH, SQL_ECHO

DATABASE_URL = f"sqlite:///{DB_PATH}"

engine = create_engine(
    DATABASE_URL,
    echo=SQL_ECHO,
    future=True,
    # pooled connections are handed to FastAPI worker threads
    connect_args={"check_same_thread": False},
)

SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    future=True,
    expire_on_commit=False
)

# Serializes every store access (reads and writes) across the process.
db_lock = threading.Lock()


class Base(DeclarativeBase):
    """Base ORM for all models."""
    pass


@contextmanager
def db_session() -> Iterator[Session]:
    """
    Scoped store access under the global lock:
    - commit if everything went fine
    - rollback on exceptions
    - always close the session and release the lock
    """
    with db_lock:
        session: Session = SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()
