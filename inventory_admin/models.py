# inventory_admin/models.py
from sqlalchemy import (
    Column, Integer, String, Float, DateTime, ForeignKey, Text, CheckConstraint, Index
)
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func
import enum
import uuid

Base = declarative_base()


class UserStatus(enum.Enum):
    """Account status of an application user."""
    ACTIVE = 'Active'
    INACTIVE = 'Inactive'

    def __str__(self):
        return self.value

    @classmethod
    def from_string(cls, value: str) -> 'UserStatus':
        """Create a UserStatus from its display value.

        Raises:
            ValueError if the string value is not valid
        """
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Invalid user status: {value}. Valid values are: Active, Inactive")


def _new_location_id():
    return str(uuid.uuid4())


class Supplier(Base):
    __tablename__ = 'suppliers'

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=False)
    address = Column(Text, nullable=False)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    products = relationship("Product", back_populates="supplier")


class Location(Base):
    __tablename__ = 'locations'

    id = Column(String(36), primary_key=True, default=_new_location_id)
    name = Column(String(100), nullable=False)
    type = Column(String(50), nullable=False)  # Warehouse, Store, Distribution Center
    address = Column(Text, nullable=False)
    capacity = Column(Integer, nullable=False, default=0)
    manager = Column(String(100), nullable=False)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    products = relationship("Product", back_populates="location")
    users = relationship("User", back_populates="location")

    __table_args__ = (
        CheckConstraint('capacity >= 0', name='ck_locations_capacity'),
    )


class Product(Base):
    __tablename__ = 'products'

    id = Column(Integer, primary_key=True)
    name = Column(String(200), nullable=False)
    description = Column(Text)
    sku = Column(String(50), nullable=False, unique=True)
    price = Column(Float, nullable=False, default=0.0)
    quantity = Column(Integer, nullable=False, default=0)
    stock = Column(Integer)
    category = Column(String(100))
    supplier_id = Column(Integer, ForeignKey('suppliers.id'), nullable=False)
    location_id = Column(String(36), ForeignKey('locations.id'))

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    supplier = relationship("Supplier", back_populates="products")
    location = relationship("Location", back_populates="products")

    __table_args__ = (
        CheckConstraint('price >= 0', name='ck_products_price'),
        CheckConstraint('quantity >= 0', name='ck_products_quantity'),
        CheckConstraint('stock IS NULL OR stock >= 0', name='ck_products_stock'),
        Index('ix_products_category', 'category'),
    )


class User(Base):
    """Application user record; not the authenticated principal."""
    __tablename__ = 'users'

    id = Column(Integer, primary_key=True)
    username = Column(String(100), nullable=False)
    name = Column(String(200))
    email = Column(String(255), nullable=False)
    role = Column(String(50))
    department = Column(String(100))
    status = Column(String(20), nullable=False, default=UserStatus.ACTIVE.value)
    location_id = Column(String(36), ForeignKey('locations.id'))

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    location = relationship("Location", back_populates="users")

    __table_args__ = (
        CheckConstraint("status IN ('Active', 'Inactive')", name='ck_users_status'),
    )


MODELS_BY_TABLE = {
    model.__tablename__: model
    for model in (Supplier, Location, Product, User)
}
