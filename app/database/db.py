import logging
from contextlib import contextmanager
from typing import Generator, Iterator

from sqlalchemy import MetaData, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from app.core.config import get_database_schema, get_database_url, get_sql_echo
from app.core.errors import PersistenceError

logger = logging.getLogger(__name__)

DATABASE_URL = get_database_url()

_connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}


class Base(DeclarativeBase):
    metadata = MetaData(schema=get_database_schema())


engine: Engine = create_engine(DATABASE_URL, echo=get_sql_echo(), connect_args=_connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def persistence_guard(db: Session, operation: str) -> Iterator[None]:
    """Roll back on any database failure and surface it as PersistenceError."""
    try:
        yield
    except PersistenceError:
        db.rollback()
        raise
    except SQLAlchemyError as exc:
        logger.error("%s failed: %s", operation, exc)
        db.rollback()
        raise PersistenceError(operation) from exc
