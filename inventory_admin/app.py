# inventory_admin/app.py
import logging
from typing import Dict, Optional

from inventory_admin.auth import AuthProvider, SessionBinding, SupabaseAuthProvider
from inventory_admin.config import config as default_config
from inventory_admin.db.connection import DataServiceConnection
from inventory_admin.db.interface import RemoteDataService
from inventory_admin.preferences import ThemePreference
from inventory_admin.services.dashboard_service import DashboardService
from inventory_admin.stores import (
    EntityStore, LocationStore, ProductStore, SessionState, SupplierStore, UserStore
)

logger = logging.getLogger(__name__)


class InventoryAdmin:
    """Composition root: one data service, one session, one store per entity.

    Everything is built here and handed to the view layer explicitly; no
    store is a module-level singleton.
    """

    def __init__(
        self,
        data_service: RemoteDataService,
        auth_provider: Optional[AuthProvider] = None,
        app_config=None,
        preferences: Optional[ThemePreference] = None
    ):
        app_config = app_config or default_config
        self.config = app_config
        self.data_service = data_service
        self.connection: Optional[DataServiceConnection] = None

        self.session = SessionState()
        self.auth = SessionBinding(self.session, auth_provider) if auth_provider else None

        self.products = ProductStore(data_service)
        self.suppliers = SupplierStore(data_service)
        self.locations = LocationStore(data_service)
        self.users = UserStore(data_service)

        self.dashboard = DashboardService(
            data_service, app_config.dashboard_config['low_stock_threshold']
        )
        self.preferences = preferences or ThemePreference(app_config.preferences_file)

    @classmethod
    async def create(cls, app_config=None) -> 'InventoryAdmin':
        """Connect to the configured backend and build the application."""
        app_config = app_config or default_config
        connection = DataServiceConnection(app_config)
        data_service = await connection.connect()

        auth_provider = None
        if connection.db_type == 'supabase':
            auth_provider = SupabaseAuthProvider(connection.get_supabase())

        app = cls(data_service, auth_provider=auth_provider, app_config=app_config)
        app.connection = connection
        return app

    @property
    def stores(self) -> Dict[str, EntityStore]:
        return {
            'products': self.products,
            'suppliers': self.suppliers,
            'locations': self.locations,
            'users': self.users,
        }

    async def start(self) -> None:
        """Resolve the current session and start following auth changes."""
        if self.auth is not None:
            await self.auth.start()
        else:
            self.session.clear_session()

    async def refresh_all(self) -> Dict[str, Optional[str]]:
        """Fetch every store; returns each store's error (None when it succeeded)."""
        errors = {}
        for name, store in self.stores.items():
            await store.fetch_all()
            errors[name] = store.error
        return errors

    async def close(self) -> None:
        if self.auth is not None:
            self.auth.close()
        if self.connection is not None:
            await self.connection.close()
        logger.debug("Inventory Admin closed")

    async def __aenter__(self):
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()
