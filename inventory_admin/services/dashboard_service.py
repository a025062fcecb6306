# inventory_admin/services/dashboard_service.py
import logging
from typing import Dict, Iterable, List, NamedTuple, Optional

from inventory_admin.db.interface import RemoteDataService

logger = logging.getLogger(__name__)


class DashboardStats(NamedTuple):
    total_products: int
    low_stock_items: int
    stock_value: float


class DashboardService:
    """Aggregate figures for the dashboard cards."""

    def __init__(self, data_service: RemoteDataService, low_stock_threshold: int = 10):
        """Initialize the dashboard service.

        Args:
            data_service: Remote data service used for count-only queries
            low_stock_threshold: Quantity at or below which a product is low on stock
        """
        self.data_service = data_service
        self.low_stock_threshold = low_stock_threshold

    async def total_products(self) -> int:
        return await self.data_service.count('products')

    async def low_stock_items(self) -> int:
        return await self.data_service.count(
            'products', {'quantity__lte': self.low_stock_threshold}
        )

    @staticmethod
    def stock_value(products: Iterable[Dict]) -> float:
        """Total inventory value as price times quantity."""
        return round(sum(
            (p.get('price') or 0) * (p.get('quantity') or 0) for p in products
        ), 2)

    async def collect(self, products: Optional[List[Dict]] = None) -> DashboardStats:
        """Gather all dashboard figures.

        Args:
            products: Already loaded product rows; fetched when omitted

        Returns:
            DashboardStats

        Raises:
            DataServiceError if any remote query fails
        """
        total = await self.total_products()
        low_stock = await self.low_stock_items()

        if products is None:
            products = await self.data_service.select('products')

        stats = DashboardStats(total, low_stock, self.stock_value(products))
        logger.debug(f"Dashboard stats: {stats}")
        return stats
