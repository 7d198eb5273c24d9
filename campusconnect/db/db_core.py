"""Core database functionality and configuration.

Engine and session management for the relational registration store.
SQLite is used in development, PostgreSQL (DATABASE_URL) in production.
"""

from contextlib import contextmanager
import logging
from pathlib import Path
from typing import Optional, Dict, Any, Generator
import os

from sqlalchemy import create_engine, Engine, inspect
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from ..models import Base
from ..models.registration_record import RegistrationRecord  # noqa
from ..config.environment import IS_PRODUCTION_ENVIRONMENT

logger = logging.getLogger(__name__)

DEFAULT_SQLITE_PATH = Path(__file__).parent.parent.parent / 'data' / 'campusconnect.db'


class DatabaseConfig:
    """
    Where the registration table lives and how to connect to it.

    Resolution order for the URL: the ``url`` argument, then DATABASE_URL in
    production, then a SQLite file (``sqlite_path``) in development. Pool
    options only apply to server databases.

    Raises:
        ValueError: In production when neither ``url`` nor DATABASE_URL is set
    """

    def __init__(
        self,
        url: Optional[str] = None,
        sqlite_path: Optional[Path] = None,
        echo: bool = False,
        pool_size: int = 3,
        max_overflow: int = 4,
        pool_timeout: int = 30,
        pool_recycle: int = 3600,
        pool_pre_ping: bool = True
    ):
        self.sqlite_path: Optional[Path] = None
        if url:
            self.url = url
        elif IS_PRODUCTION_ENVIRONMENT:
            self.url = os.environ.get('DATABASE_URL', '')
            if not self.url:
                raise ValueError("DATABASE_URL is required in production when no url is given")
        else:
            self.sqlite_path = Path(sqlite_path or DEFAULT_SQLITE_PATH)
            self.url = f"sqlite:///{self.sqlite_path}"

        self.echo = echo
        self.pool_options = {
            "pool_size": pool_size,
            "max_overflow": max_overflow,
            "pool_timeout": pool_timeout,
            "pool_recycle": pool_recycle,
            "pool_pre_ping": pool_pre_ping,
        }

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith('sqlite')

    def get_engine_args(self) -> Dict[str, Any]:
        """Keyword arguments for ``create_engine``."""
        if self.is_sqlite:
            # One shared connection, usable from the worker threads the stores run in
            return {
                "echo": self.echo,
                "connect_args": {"check_same_thread": False},
                "poolclass": StaticPool,
            }
        return {"echo": self.echo, **self.pool_options}


class DatabaseError(Exception):
    """Base exception for database-related errors."""
    pass


class ConnectionError(DatabaseError):
    """The engine could not be created."""
    pass


class SessionError(DatabaseError):
    """A unit of work failed and was rolled back."""
    pass


class Database:
    """Engine plus session factory for one database.

    Constructed once per process by the service wiring and passed to the
    stores that need it.
    """

    def __init__(self, config: Optional[DatabaseConfig] = None):
        self.config = config or DatabaseConfig()
        self._session_factory = sessionmaker(expire_on_commit=False)
        self._tables_checked = False
        try:
            if self.config.sqlite_path is not None:
                self.config.sqlite_path.parent.mkdir(parents=True, exist_ok=True)
            self.engine: Engine = create_engine(self.config.url, **self.config.get_engine_args())
        except Exception as e:
            raise ConnectionError(f"Failed to create database engine: {e}") from e
        self._session_factory.configure(bind=self.engine)

    def ensure_tables_exist(self) -> None:
        """Create the registration table on first use if it is missing."""
        if self._tables_checked:
            return
        try:
            missing = set(Base.metadata.tables) - set(inspect(self.engine).get_table_names())
            if missing:
                logger.info(f"Creating missing tables: {', '.join(sorted(missing))}")
                Base.metadata.create_all(self.engine)
        except Exception as e:
            raise DatabaseError(f"Failed to verify/create database schema: {e}") from e
        self._tables_checked = True

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """
        Unit of work. Commits on success; on any error rolls back and raises SessionError.

        Example:
            with db.session() as session:
                session.add(RegistrationRecord(user_id='u1', event_id='1'))

        Raises:
            SessionError: If anything inside the block failed
            DatabaseError: If the schema could not be created
        """
        self.ensure_tables_exist()

        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception as e:
            session.rollback()
            raise SessionError(f"Database session error: {e}") from e
        finally:
            session.close()

    def dispose(self) -> None:
        self.engine.dispose()
