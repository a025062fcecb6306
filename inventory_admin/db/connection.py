# inventory_admin/db/connection.py
import logging
from typing import Literal

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from supabase import acreate_client, AsyncClient

from inventory_admin.config import config as default_config
from inventory_admin.exceptions import ConfigError, DataServiceError
from inventory_admin.models import Base
from inventory_admin.db.interface import RemoteDataService, SupabaseDataService, SQLAlchemyDataService

logger = logging.getLogger(__name__)

DatabaseType = Literal["supabase", "postgresql", "sqlite"]


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str, echo: bool = False):
    """Create a SQLAlchemy engine; SQLite gets foreign keys and a shared in-memory pool.

    An in-memory SQLite URL is meant for tests only: StaticPool and
    check_same_thread=False make every ``asyncio.to_thread`` worker share
    one connection, which is only safe while calls are awaited one at a time.
    """
    if url.startswith('sqlite'):
        kwargs = {'connect_args': {'check_same_thread': False}}
        if ':memory:' in url or url in ('sqlite://', 'sqlite:///'):
            kwargs['poolclass'] = StaticPool
        engine = create_engine(url, echo=echo, **kwargs)
        event.listen(engine, 'connect', _enable_sqlite_foreign_keys)
        return engine

    return create_engine(url, echo=echo, pool_pre_ping=True)


class DataServiceConnection:
    """Connection handler for the hosted Supabase backend or a direct database.

    One instance per application; it is passed to whatever needs it rather
    than shared as a module-level singleton.
    """

    def __init__(self, app_config=None):
        self._config = app_config or default_config
        self._db_type: DatabaseType = self._config.db_type
        self._engine = None
        self._supabase = None
        self._data_service = None

        if self._db_type not in ("supabase", "postgresql", "sqlite"):
            raise ConfigError(f"Unknown database type: {self._db_type}")

    async def connect(self) -> RemoteDataService:
        """Open the backend connection and return the data service."""
        if self._data_service is not None:
            return self._data_service

        if self._db_type == "supabase":
            await self._initialize_supabase()
            self._data_service = SupabaseDataService(self._supabase)
        else:
            self._initialize_sqlalchemy()
            self._data_service = SQLAlchemyDataService(
                sessionmaker(autocommit=False, autoflush=False, bind=self._engine)
            )

        logger.info(f"Connected to {self._db_type} data service")
        return self._data_service

    async def _initialize_supabase(self):
        """Initialize Supabase connection."""
        supabase_config = self._config.supabase_config

        if not supabase_config['url'] or not supabase_config['key']:
            raise ConfigError("Supabase URL and key must be provided")

        try:
            self._supabase = await acreate_client(supabase_config['url'], supabase_config['key'])
        except Exception as e:
            raise DataServiceError(f"Failed to initialize Supabase connection: {str(e)}") from e

    def _initialize_sqlalchemy(self):
        """Initialize a direct database connection and create missing tables."""
        url = self._config.get('DATABASE', 'url', '')
        if not url:
            raise ConfigError("DATABASE.url must be set for a direct database connection")

        try:
            self._engine = build_engine(url, echo=self._config.get_boolean('DATABASE', 'echo', False))
            Base.metadata.create_all(bind=self._engine)
        except Exception as e:
            raise DataServiceError(f"Failed to initialize {self._db_type} connection: {str(e)}") from e

    def get_supabase(self) -> AsyncClient:
        """Get Supabase client (Supabase only)."""
        if self._db_type != "supabase" or self._supabase is None:
            raise DataServiceError("get_supabase is only available on a connected Supabase backend")

        return self._supabase

    @property
    def engine(self):
        """Get SQLAlchemy engine (direct database only)."""
        if self._engine is None:
            raise DataServiceError("engine is only available on a connected direct database backend")

        return self._engine

    @property
    def db_type(self) -> DatabaseType:
        """Get current database type."""
        return self._db_type

    async def close(self):
        """Release the underlying engine; Supabase clients hold no pool to close."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
        self._data_service = None
