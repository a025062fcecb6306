"""
Shared fixtures for the Inventory Admin tests.
"""
from unittest.mock import AsyncMock, MagicMock

from sqlalchemy.orm import sessionmaker

from inventory_admin.auth import AuthProvider, AuthSubscription
from inventory_admin.db.connection import build_engine
from inventory_admin.db.interface import RemoteDataService, SQLAlchemyDataService
from inventory_admin.models import Base


def sqlite_data_service():
    """Fresh in-memory database behind the SQLAlchemy data service."""
    engine = build_engine('sqlite://')
    Base.metadata.create_all(bind=engine)
    return SQLAlchemyDataService(sessionmaker(bind=engine)), engine


def failing_data_service(error):
    """Data service whose every call raises error."""
    service = MagicMock(spec=RemoteDataService)
    for name in ('select', 'insert', 'update', 'delete', 'count'):
        setattr(service, name, AsyncMock(side_effect=error))
    return service


def supplier_draft(**overrides):
    draft = {
        'name': 'Acme Supply',
        'email': 'orders@acme.example',
        'phone': '555-0100',
        'address': '1 Industrial Way'
    }
    draft.update(overrides)
    return draft


def product_draft(supplier_id, **overrides):
    draft = {
        'name': 'Widget A',
        'sku': 'WID-001',
        'price': 9.99,
        'quantity': 25,
        'category': 'Tools',
        'supplier_id': supplier_id
    }
    draft.update(overrides)
    return draft


class FakeAuthProvider(AuthProvider):
    """In-process auth provider that lets tests emit auth changes."""

    def __init__(self, principal=None, error=None):
        self.principal = principal
        self.error = error
        self.callbacks = []
        self.released = 0

    async def get_current_principal(self):
        if self.error:
            raise self.error
        return self.principal

    def subscribe(self, callback):
        self.callbacks.append(callback)

        def release():
            self.released += 1
            self.callbacks.remove(callback)

        return AuthSubscription(release)

    def emit(self, change):
        for callback in list(self.callbacks):
            callback(change)

    async def sign_in(self, email, password):
        self.principal = {'email': email}
        return self.principal

    async def sign_out(self):
        self.principal = None
