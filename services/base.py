"""
Base service for the business logic layer.
Services orchestrate business operations using repositories and own the
transaction: one commit per operation, rollback on any failure.
"""

from contextlib import contextmanager
from typing import Iterator
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.exceptions import ConflictError

logger = logging.getLogger("schoolmeal.services")


@contextmanager
def unit_of_work(db: Session, conflict_message: str = "Conflicting data") -> Iterator[Session]:
    """
    Commit the work done inside the block, or roll it back.

    Storage-level uniqueness violations (IntegrityError) become ConflictError;
    any other exception is re-raised after the rollback.
    """
    try:
        yield db
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"integrity_conflict message={conflict_message!r} error={e.orig}")
        raise ConflictError(conflict_message) from e
    except Exception:
        db.rollback()
        raise


class BaseService:
    """
    Base service providing common functionality.
    Instance-style services hold the request's session.
    """

    def __init__(self, db: Session, logger_name: str):
        self.db = db
        self.logger = logging.getLogger(logger_name)

    def transaction(self, conflict_message: str = "Conflicting data"):
        return unit_of_work(self.db, conflict_message)

    def log_info(self, message: str, **kwargs):
        """Log info message with structured data"""
        extra_data = " ".join([f"{k}={v}" for k, v in kwargs.items()])
        self.logger.info(f"{message} {extra_data}".strip())
