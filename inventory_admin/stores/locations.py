# inventory_admin/stores/locations.py
from typing import List

from inventory_admin.stores.base import EntitySchema, EntityStore, Row

LOCATION_SCHEMA = EntitySchema(
    table_name='locations',
    entity_name='location',
    order_by='name',
    search_fields=('name',),
    facet_fields=('type',)
)


class LocationStore(EntityStore):
    """Warehouses, stores and distribution centers ordered by name."""

    schema = LOCATION_SCHEMA

    @property
    def locations(self) -> List[Row]:
        return self.items

    def total_capacity(self, location_type: str = None) -> int:
        """Summed capacity, optionally for a single location type."""
        return sum(
            loc.get('capacity') or 0 for loc in self.items
            if location_type is None or loc.get('type') == location_type
        )
