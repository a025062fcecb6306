# inventory_admin/db/__init__.py
from .interface import (
    RemoteDataService,
    SupabaseDataService,
    SQLAlchemyDataService,
    parse_filter_key,
)
from .connection import DataServiceConnection, build_engine

__all__ = [
    'RemoteDataService',
    'SupabaseDataService',
    'SQLAlchemyDataService',
    'DataServiceConnection',
    'build_engine',
    'parse_filter_key',
]
