# inventory_admin/stores/users.py
from typing import List

from inventory_admin.exceptions import ValidationError
from inventory_admin.models import UserStatus
from inventory_admin.stores.base import EntitySchema, EntityStore, Row

USER_SCHEMA = EntitySchema(
    table_name='users',
    entity_name='user',
    order_by='created_at',
    ascending=False,
    search_fields=('name', 'username', 'email'),
    facet_fields=('role', 'status')
)


class UserStore(EntityStore):
    """Application users, newest first; faceted by role and status."""

    schema = USER_SCHEMA

    @property
    def users(self) -> List[Row]:
        return self.items

    def active(self) -> List[Row]:
        return [u for u in self.items if u.get('status') == UserStatus.ACTIVE.value]

    async def set_status(self, user_id, status) -> bool:
        """Activate or deactivate a user account."""
        if not isinstance(status, UserStatus):
            try:
                status = UserStatus.from_string(status)
            except ValueError as e:
                self._fail('update', ValidationError(str(e)))
                return False
        return await self.update(user_id, {'status': status.value}) is not None
