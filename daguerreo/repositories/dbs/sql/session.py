"""SQL session management."""

from contextlib import contextmanager
from typing import Iterator, Optional
from sqlalchemy.orm import Session
from daguerreo.core.database import SessionLocal
from daguerreo.utils.helpers import logger

class SqlSessionManager:
    """Manages the database session used by one repository."""

    def __init__(self, session: Optional[Session] = None):
        """Use an injected session, or open one lazily from SessionLocal."""
        self._session: Optional[Session] = session
        self._owns_session = session is None

    def get_session(self) -> Session:
        """Get database session."""
        if self._session is None:
            self._session = SessionLocal()
            self._owns_session = True
        return self._session

    def close_session(self):
        """Close the session if this manager opened it."""
        if self._session is not None and self._owns_session:
            self._session.close()
            self._session = None

    @contextmanager
    def transaction(self, operation: str) -> Iterator[Session]:
        """Commit on success, roll back and re-raise on any error."""
        session = self.get_session()
        try:
            yield session
            session.commit()
        except Exception as e:
            logger.error(f"Error during {operation}: {str(e)}")
            session.rollback()
            raise
