"""
API dependencies for dependency injection
"""

from typing import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from domain.models import get_db_session
from repositories.decision_store import DecisionStore, SQLDecisionStore


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI routes.

    Usage:
        @router.get("/example")
        def example(db: Session = Depends(get_db)):
            # Use db session here
            pass
    """
    yield from get_db_session()


def get_decision_store(db: Session = Depends(get_db)) -> DecisionStore:
    """Decision store bound to the request's session (overridable in tests)"""
    return SQLDecisionStore(db)
