"""
Generic persistence store over a SQLAlchemy session.

Parameterized find/insert/update/delete used by the entity CRUD modules.
Every operation runs inside translate_store_errors(), which is the only place
SQLAlchemy/driver exceptions are turned into the application error taxonomy.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Type

from sqlalchemy.exc import (
    DisconnectionError,
    IntegrityError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
    TimeoutError as PoolTimeoutError,
)
from sqlalchemy.orm import Session

from jobboard.core.database import Base
from jobboard.core.exceptions import InternalError, ServiceUnavailableError, ValidationError

logger = logging.getLogger(__name__)

# Errors that mean the store is unreachable, overloaded or timed out
UNAVAILABLE_ERRORS = (OperationalError, InterfaceError, DisconnectionError, PoolTimeoutError)


def _rollback(db: Session) -> None:
    try:
        db.rollback()
    except SQLAlchemyError as e:
        logger.error(f"Rollback failed: {type(e).__name__}")


@contextmanager
def translate_store_errors(db: Session, operation: str) -> Iterator[None]:
    """
    Map store failures onto the error taxonomy.

    - IntegrityError -> ValidationError (constraint violated by the input)
    - connectivity / pool timeout -> ServiceUnavailableError
    - anything else from SQLAlchemy -> InternalError

    Driver messages are logged, never passed to the caller.
    """
    try:
        yield
    except IntegrityError as e:
        _rollback(db)
        logger.warning(f"Store constraint violation during {operation}: {e.orig}")
        raise ValidationError("Request conflicts with existing data") from e
    except UNAVAILABLE_ERRORS as e:
        _rollback(db)
        logger.error(f"Store unavailable during {operation}: {type(e).__name__}: {e}")
        raise ServiceUnavailableError() from e
    except SQLAlchemyError as e:
        _rollback(db)
        logger.error(f"Store error during {operation}: {type(e).__name__}: {e}")
        raise InternalError() from e


def find(db: Session, model: Type[Base], *conditions: Any, **criteria: Any) -> List[Any]:
    """Return all rows of `model` matching the SQL conditions and column=value criteria."""
    with translate_store_errors(db, f"find {model.__tablename__}"):
        return db.query(model).filter(*conditions).filter_by(**criteria).order_by(model.id).all()


def find_one(db: Session, model: Type[Base], *conditions: Any, **criteria: Any) -> Optional[Any]:
    """Return the first matching row, or None."""
    with translate_store_errors(db, f"find {model.__tablename__}"):
        return db.query(model).filter(*conditions).filter_by(**criteria).first()


def insert(db: Session, model: Type[Base], fields: Dict[str, Any]) -> int:
    """
    Insert a row and commit.

    Returns:
        The generated primary key
    """
    with translate_store_errors(db, f"insert {model.__tablename__}"):
        row = model(**fields)
        db.add(row)
        db.commit()
        db.refresh(row)
        return row.id


def update(db: Session, model: Type[Base], fields: Dict[str, Any], *conditions: Any, **criteria: Any) -> int:
    """
    Update matching rows in a single UPDATE statement and commit.

    Returns:
        Number of rows affected
    """
    with translate_store_errors(db, f"update {model.__tablename__}"):
        affected = (
            db.query(model)
            .filter(*conditions)
            .filter_by(**criteria)
            .update(fields, synchronize_session=False)
        )
        db.commit()
        return affected


def delete(db: Session, model: Type[Base], *conditions: Any, **criteria: Any) -> int:
    """
    Delete matching rows and commit.

    Rows are loaded and deleted through the session so ORM cascades apply.

    Returns:
        Number of rows deleted
    """
    with translate_store_errors(db, f"delete {model.__tablename__}"):
        rows = db.query(model).filter(*conditions).filter_by(**criteria).all()
        for row in rows:
            db.delete(row)
        db.commit()
        return len(rows)
