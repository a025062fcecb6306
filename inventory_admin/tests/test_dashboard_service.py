"""
Unit tests for the dashboard aggregates.
"""
import unittest

from inventory_admin.exceptions import DataServiceError
from inventory_admin.services.dashboard_service import DashboardService, DashboardStats
from inventory_admin.stores import ProductStore, SupplierStore
from inventory_admin.tests.helpers import (
    failing_data_service, product_draft, sqlite_data_service, supplier_draft
)


class TestDashboardService(unittest.IsolatedAsyncioTestCase):

    async def asyncSetUp(self):
        self.service, self.engine = sqlite_data_service()
        supplier = await SupplierStore(self.service).create(supplier_draft())

        self.products = ProductStore(self.service)
        for sku, quantity, price in (('A-1', 5, 2.0), ('A-2', 10, 1.5), ('A-3', 20, 3.0)):
            await self.products.create(product_draft(supplier['id'], sku=sku, quantity=quantity, price=price))

        self.dashboard = DashboardService(self.service, low_stock_threshold=10)

    async def asyncTearDown(self):
        self.engine.dispose()

    async def test_counts(self):
        self.assertEqual(await self.dashboard.total_products(), 3)
        self.assertEqual(await self.dashboard.low_stock_items(), 2)

    async def test_collect_with_loaded_products(self):
        stats = await self.dashboard.collect(self.products.items)
        self.assertEqual(stats, DashboardStats(3, 2, 85.0))

    async def test_collect_fetches_products(self):
        stats = await self.dashboard.collect()
        self.assertEqual(stats.stock_value, 85.0)

    async def test_threshold(self):
        dashboard = DashboardService(self.service, low_stock_threshold=4)
        self.assertEqual(await dashboard.low_stock_items(), 0)

    async def test_remote_failure_raises(self):
        dashboard = DashboardService(failing_data_service(DataServiceError("offline")))

        with self.assertRaises(DataServiceError):
            await dashboard.collect()


class TestStockValue(unittest.TestCase):

    def test_missing_values_count_as_zero(self):
        rows = [{'price': 2.5, 'quantity': 4}, {'price': None, 'quantity': 3}, {'price': 1.0}]
        self.assertEqual(DashboardService.stock_value(rows), 10.0)


if __name__ == '__main__':
    unittest.main()
