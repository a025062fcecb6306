# inventory_admin/db/interface.py
import asyncio
import operator
import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import date, datetime
from typing import Dict, Any, Optional, List, Tuple

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from inventory_admin.exceptions import InventoryAdminError, DataServiceError, NotFoundError
from inventory_admin.models import MODELS_BY_TABLE

logger = logging.getLogger(__name__)

Row = Dict[str, Any]

FILTER_OPERATORS = ('lte', 'gte', 'lt', 'gt')


def parse_filter_key(key: str) -> Tuple[str, str]:
    """Split a filter key into (column, operator).

    ``"quantity__lte"`` becomes ``("quantity", "lte")``; a bare column name
    means equality.
    """
    column, sep, op = key.rpartition('__')
    if sep and op in FILTER_OPERATORS:
        return column, op
    return key, 'eq'


class RemoteDataService(ABC):
    """Asynchronous per-table contract of the hosted data service.

    Implementations raise ``DataServiceError`` on any failure and
    ``NotFoundError`` when ``update``/``delete`` address an unknown id.
    """

    @abstractmethod
    async def select(self, table_name: str, order_by: str = None, ascending: bool = True,
                     filters: Dict[str, Any] = None) -> List[Row]:
        """Fetch all rows of a table, optionally filtered and ordered."""
        pass

    @abstractmethod
    async def insert(self, table_name: str, row: Row) -> Row:
        """Insert a row and return it as persisted."""
        pass

    @abstractmethod
    async def update(self, table_name: str, row_id: Any, patch: Row) -> Row:
        """Apply a partial update to one row and return it as persisted."""
        pass

    @abstractmethod
    async def delete(self, table_name: str, row_id: Any) -> None:
        """Delete one row by id."""
        pass

    @abstractmethod
    async def count(self, table_name: str, filters: Dict[str, Any] = None) -> int:
        """Count rows without fetching them."""
        pass


class SupabaseDataService(RemoteDataService):
    """Supabase (PostgREST) implementation over the async client."""

    def __init__(self, client):
        """Initialize with an async Supabase client."""
        self.client = client

    def _apply_filters(self, query, filters: Optional[Dict[str, Any]]):
        for key, value in (filters or {}).items():
            column, op = parse_filter_key(key)
            if op == 'eq' and isinstance(value, list):
                query = query.in_(column, value)
            elif op == 'eq':
                query = query.eq(column, value)
            else:
                query = getattr(query, op)(column, value)
        return query

    async def _execute(self, action: str, table_name: str, query):
        try:
            return await query.execute()
        except Exception as e:
            message = getattr(e, 'message', None) or str(e)
            raise DataServiceError(
                f"Supabase {action} on {table_name} failed: {message}",
                code=getattr(e, 'code', None)
            ) from e

    async def select(self, table_name, order_by=None, ascending=True, filters=None):
        query = self._apply_filters(self.client.table(table_name).select('*'), filters)

        if order_by:
            query = query.order(order_by, desc=not ascending)

        result = await self._execute('select', table_name, query)
        return result.data if result.data else []

    async def insert(self, table_name, row):
        result = await self._execute('insert', table_name, self.client.table(table_name).insert(row))

        if not result.data:
            raise DataServiceError(f"Supabase insert on {table_name} returned no row")

        return result.data[0]

    async def update(self, table_name, row_id, patch):
        query = self.client.table(table_name).update(patch).eq('id', row_id)
        result = await self._execute('update', table_name, query)

        if not result.data:
            raise NotFoundError(f"No row in {table_name} with id {row_id}")

        return result.data[0]

    async def delete(self, table_name, row_id):
        query = self.client.table(table_name).delete().eq('id', row_id)
        result = await self._execute('delete', table_name, query)

        if not result.data:
            raise NotFoundError(f"No row in {table_name} with id {row_id}")

    async def count(self, table_name, filters=None):
        query = self.client.table(table_name).select('*', count='exact', head=True)
        query = self._apply_filters(query, filters)

        result = await self._execute('count', table_name, query)
        return result.count or 0


class SQLAlchemyDataService(RemoteDataService):
    """Direct database implementation over a SQLAlchemy session factory.

    ORM calls are blocking, so each one runs in a worker thread with its own
    short-lived session.
    """

    _operators = {
        'eq': operator.eq,
        'lte': operator.le,
        'gte': operator.ge,
        'lt': operator.lt,
        'gt': operator.gt,
    }

    def __init__(self, session_factory, models: Dict[str, Any] = None):
        self._session_factory = session_factory
        self._models = models or MODELS_BY_TABLE

    @contextmanager
    def session_scope(self):
        """Provide transaction scope for database operations."""
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    async def _run(self, action: str, table_name: str, fn, *args):
        try:
            return await asyncio.to_thread(fn, *args)
        except InventoryAdminError:
            raise
        except SQLAlchemyError as e:
            message = str(getattr(e, 'orig', None) or e)
            raise DataServiceError(f"Database {action} on {table_name} failed: {message}") from e

    def _get_model(self, table_name: str):
        try:
            return self._models[table_name]
        except KeyError:
            raise DataServiceError(f"Unknown table: {table_name}")

    def _column(self, model, name: str):
        if name not in model.__table__.columns:
            raise DataServiceError(f"Unknown column {name} on {model.__tablename__}")
        return getattr(model, name)

    def _apply_filters(self, query, model, filters):
        for key, value in (filters or {}).items():
            column_name, op = parse_filter_key(key)
            column = self._column(model, column_name)
            if op == 'eq' and isinstance(value, list):
                query = query.filter(column.in_(value))
            else:
                query = query.filter(self._operators[op](column, value))
        return query

    def _row_to_dict(self, instance) -> Row:
        """Convert model instance to the JSON shape the hosted service returns."""
        result = {}
        for column in instance.__table__.columns:
            value = getattr(instance, column.name)
            if isinstance(value, (datetime, date)):
                value = value.isoformat()
            result[column.name] = value
        return result

    def _assign(self, instance, values: Row):
        for key, value in values.items():
            self._column(type(instance), key)
            setattr(instance, key, value)

    def _select(self, table_name, order_by, ascending, filters):
        model = self._get_model(table_name)
        with self.session_scope() as session:
            query = self._apply_filters(session.query(model), model, filters)
            if order_by:
                column = self._column(model, order_by)
                query = query.order_by(column.asc() if ascending else column.desc())
            return [self._row_to_dict(instance) for instance in query.all()]

    def _insert(self, table_name, row):
        model = self._get_model(table_name)
        with self.session_scope() as session:
            instance = model()
            self._assign(instance, row)
            session.add(instance)
            session.flush()
            session.refresh(instance)
            return self._row_to_dict(instance)

    def _update(self, table_name, row_id, patch):
        model = self._get_model(table_name)
        with self.session_scope() as session:
            instance = session.get(model, row_id)
            if instance is None:
                raise NotFoundError(f"No row in {table_name} with id {row_id}")
            self._assign(instance, patch)
            session.flush()
            session.refresh(instance)
            return self._row_to_dict(instance)

    def _delete(self, table_name, row_id):
        model = self._get_model(table_name)
        with self.session_scope() as session:
            instance = session.get(model, row_id)
            if instance is None:
                raise NotFoundError(f"No row in {table_name} with id {row_id}")
            session.delete(instance)

    def _count(self, table_name, filters):
        model = self._get_model(table_name)
        with self.session_scope() as session:
            query = self._apply_filters(session.query(func.count()).select_from(model), model, filters)
            return query.scalar() or 0

    async def select(self, table_name, order_by=None, ascending=True, filters=None):
        return await self._run('select', table_name, self._select, table_name, order_by, ascending, filters)

    async def insert(self, table_name, row):
        return await self._run('insert', table_name, self._insert, table_name, row)

    async def update(self, table_name, row_id, patch):
        return await self._run('update', table_name, self._update, table_name, row_id, patch)

    async def delete(self, table_name, row_id):
        await self._run('delete', table_name, self._delete, table_name, row_id)

    async def count(self, table_name, filters=None):
        return await self._run('count', table_name, self._count, table_name, filters)
