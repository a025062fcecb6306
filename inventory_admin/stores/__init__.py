from .base import EntitySchema, EntityStore
from .products import ProductStore, PRODUCT_SCHEMA
from .suppliers import SupplierStore, SUPPLIER_SCHEMA
from .locations import LocationStore, LOCATION_SCHEMA
from .users import UserStore, USER_SCHEMA
from .session import SessionState

__all__ = [
    'EntitySchema',
    'EntityStore',
    'ProductStore',
    'SupplierStore',
    'LocationStore',
    'UserStore',
    'SessionState',
    'PRODUCT_SCHEMA',
    'SUPPLIER_SCHEMA',
    'LOCATION_SCHEMA',
    'USER_SCHEMA',
]
