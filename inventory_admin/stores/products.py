# inventory_admin/stores/products.py
from typing import List

from inventory_admin.stores.base import EntitySchema, EntityStore, Row

PRODUCT_SCHEMA = EntitySchema(
    table_name='products',
    entity_name='product',
    order_by='created_at',
    ascending=False,
    search_fields=('name', 'sku'),
    facet_fields=('category',)
)


class ProductStore(EntityStore):
    """Products, newest first; searchable by name or SKU, faceted by category."""

    schema = PRODUCT_SCHEMA

    @property
    def products(self) -> List[Row]:
        return self.items

    def low_stock(self, threshold: int) -> List[Row]:
        """Products whose quantity is at or below the threshold."""
        return [p for p in self.items if (p.get('quantity') or 0) <= threshold]

