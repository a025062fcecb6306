from .config import config, Config
from .app import InventoryAdmin
from .exceptions import (
    InventoryAdminError, ConfigError, DataServiceError, NotFoundError, AuthenticationError
)

__all__ = [
    'config',
    'Config',
    'InventoryAdmin',
    'InventoryAdminError',
    'ConfigError',
    'DataServiceError',
    'NotFoundError',
    'AuthenticationError',
]
