# inventory_admin/stores/base.py
import logging
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Tuple

from inventory_admin.db.interface import RemoteDataService
from inventory_admin.exceptions import InventoryAdminError, ValidationError
from inventory_admin.filters import filter_rows

logger = logging.getLogger(__name__)

Row = Dict[str, Any]
Listener = Callable[['EntityStore'], None]


class EntitySchema(NamedTuple):
    """Describes one remote table as seen by its store."""
    table_name: str
    entity_name: str
    order_by: Optional[str] = None
    ascending: bool = True
    search_fields: Tuple[str, ...] = ('name',)
    facet_fields: Tuple[str, ...] = ()
    # Never sent in a create or update payload
    read_only_fields: Tuple[str, ...] = ('id', 'created_at', 'updated_at')


def same_id(left: Any, right: Any) -> bool:
    """Compare ids the way the remote key does; "5" and 5 address the same row."""
    if left is None or right is None:
        return left is right
    return str(left) == str(right)


def error_message(exc: Exception) -> str:
    """Human-readable message for a captured failure."""
    if isinstance(exc, InventoryAdminError):
        return exc.message
    return str(exc) or exc.__class__.__name__


class EntityStore:
    """In-memory mirror of one remote table with CRUD operations.

    The collection only changes after the remote call succeeded. Failures
    never propagate to the caller; they are logged and kept in ``error``.
    Successful changes always assign a new list to ``items`` so earlier
    snapshots held by a view are never mutated.
    """

    schema: EntitySchema = None

    def __init__(self, data_service: RemoteDataService, schema: EntitySchema = None):
        self._service = data_service
        self.schema = schema or self.schema
        if self.schema is None:
            raise ValueError(f"{self.__class__.__name__} requires an EntitySchema")

        self.items: List[Row] = []
        self.loading = False
        self.error: Optional[str] = None
        self._listeners: List[Listener] = []

    def __repr__(self):
        return (f"<{self.__class__.__name__} {self.schema.table_name} "
                f"items={len(self.items)} loading={self.loading} error={self.error!r}>")

    def add_listener(self, listener: Listener) -> Callable[[], None]:
        """Register a callback run after every state change; returns its remover."""
        self._listeners.append(listener)

        def remove():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def _notify(self):
        for listener in list(self._listeners):
            listener(self)

    def _begin(self):
        self.loading = True
        self.error = None
        self._notify()

    def _succeed(self, items: List[Row] = None):
        if items is not None:
            self.items = items
        self.loading = False
        self._notify()

    def _fail(self, action: str, exc: Exception):
        self.error = error_message(exc)
        self.loading = False
        logger.error(f"Failed to {action} {self.schema.entity_name}: {self.error}")
        self._notify()

    def _payload(self, values: Row) -> Row:
        return {k: v for k, v in values.items() if k not in self.schema.read_only_fields}

    async def fetch_all(self) -> None:
        """Replace the collection with every remote row."""
        self._begin()
        try:
            rows = await self._service.select(
                self.schema.table_name,
                order_by=self.schema.order_by,
                ascending=self.schema.ascending
            )
        except Exception as e:
            self._fail('fetch', e)
            return

        logger.debug(f"Fetched {len(rows)} {self.schema.table_name}")
        self._succeed(list(rows))

    async def create(self, draft: Row) -> Optional[Row]:
        """Insert a new row; the remote service assigns its id and timestamps.

        Returns:
            The persisted row, or None on failure
        """
        self._begin()
        try:
            row = await self._service.insert(self.schema.table_name, self._payload(draft))
        except Exception as e:
            self._fail('create', e)
            return None

        logger.info(f"Created {self.schema.entity_name} {row.get('id')}")
        self._succeed([row] + self.items)
        return row

    async def update(self, row_id: Any, patch: Row) -> Optional[Row]:
        """Apply a partial update; the returned row replaces the local one.

        Returns:
            The persisted row, or None on failure
        """
        self._begin()
        try:
            row = await self._service.update(self.schema.table_name, row_id, self._payload(patch))
        except Exception as e:
            self._fail('update', e)
            return None

        logger.info(f"Updated {self.schema.entity_name} {row_id}")
        updated_id = row.get('id', row_id)
        self._succeed([row if same_id(item.get('id'), updated_id) else item for item in self.items])
        return row

    async def delete(self, row_id: Any) -> bool:
        """Delete a row by id.

        Returns:
            True when the remote delete succeeded
        """
        self._begin()
        try:
            await self._service.delete(self.schema.table_name, row_id)
        except Exception as e:
            self._fail('delete', e)
            return False

        logger.info(f"Deleted {self.schema.entity_name} {row_id}")
        self._succeed([item for item in self.items if not same_id(item.get('id'), row_id)])
        return True

    def get(self, row_id: Any) -> Optional[Row]:
        """Local lookup by id."""
        for item in self.items:
            if same_id(item.get('id'), row_id):
                return item
        return None

    def search(self, query: str = None, **facets) -> List[Row]:
        """Rows visible for a search query and facet selection."""
        unknown = set(facets) - set(self.schema.facet_fields)
        if unknown:
            raise ValidationError(f"Unknown facet(s) for {self.schema.table_name}: {', '.join(sorted(unknown))}")

        return filter_rows(self.items, query, self.schema.search_fields, facets)
