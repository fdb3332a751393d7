import logging
from contextlib import contextmanager
from typing import Iterator, Optional
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker, declarative_base

from winmix.config import DATABASE_URL

logger = logging.getLogger(__name__)

Base = declarative_base()


class DatabaseService:
    """
    Owns the engine and session factory for the match history store.

    The store is written by an external loader and only read by the
    predictor, so sessions never autoflush.
    """

    def __init__(self, db_url: Optional[str] = None):
        url = db_url or DATABASE_URL
        # Hosted Postgres still hands out the legacy scheme
        if url.startswith("postgres://"):
            url = url.replace("postgres://", "postgresql://", 1)
        self.db_url = url

        is_sqlite = make_url(url).get_backend_name() == "sqlite"
        self.engine = create_engine(
            url,
            pool_pre_ping=not is_sqlite,
            # API workers share the engine across threads
            connect_args={"check_same_thread": False} if is_sqlite else {},
        )
        self._session_factory = sessionmaker(bind=self.engine, autoflush=False, expire_on_commit=False)

        logger.info(f"Match store bound to {make_url(url).render_as_string(hide_password=True)}")

    def create_tables(self) -> None:
        """Create the match tables if they do not exist yet."""
        Base.metadata.create_all(bind=self.engine)
        logger.info("Match tables ready")

    def get_session(self) -> Session:
        return self._session_factory()

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Yield a session that is committed on success and always closed."""
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()


# Singleton instance access
_db_instance: Optional[DatabaseService] = None


def get_database_service() -> DatabaseService:
    """Get the singleton database service instance."""
    global _db_instance
    if _db_instance is None:
        _db_instance = DatabaseService()
    return _db_instance
