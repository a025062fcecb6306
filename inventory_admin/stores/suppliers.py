# inventory_admin/stores/suppliers.py
from typing import List

from inventory_admin.stores.base import EntitySchema, EntityStore, Row

SUPPLIER_SCHEMA = EntitySchema(
    table_name='suppliers',
    entity_name='supplier',
    order_by='name',
    search_fields=('name', 'email')
)


class SupplierStore(EntityStore):
    """Suppliers ordered by name; searchable by name or email."""

    schema = SUPPLIER_SCHEMA

    @property
    def suppliers(self) -> List[Row]:
        return self.items
