"""
Unit tests for search and facet filtering.
"""
import copy
import unittest

from inventory_admin.filters import facet_values, filter_rows, is_active_facet


class TestFilterRows(unittest.TestCase):

    def setUp(self):
        self.items = [
            {'name': 'Widget A', 'sku': 'WID-001', 'category': 'Tools'},
            {'name': 'Gadget B', 'sku': 'GAD-002', 'category': 'Electronics'},
        ]

    def test_query_matches_case_insensitively(self):
        result = filter_rows(self.items, 'widget', fields=('name',))
        self.assertEqual(result, [self.items[0]])

    def test_facet_with_empty_query(self):
        result = filter_rows(self.items, '', fields=('name',), facets={'category': 'Electronics'})
        self.assertEqual(result, [self.items[1]])

    def test_query_and_facet_intersect(self):
        result = filter_rows(self.items, 'widget', fields=('name',), facets={'category': 'Electronics'})
        self.assertEqual(result, [])

    def test_any_designated_field_matches(self):
        result = filter_rows(self.items, 'gad-002', fields=('name', 'sku'))
        self.assertEqual(result, [self.items[1]])

    def test_inactive_facets_are_ignored(self):
        for value in (None, '', 'all', 'All'):
            with self.subTest(value=value):
                self.assertEqual(filter_rows(self.items, None, facets={'category': value}), self.items)

    def test_missing_field_never_matches(self):
        rows = [{'name': None}, {}]
        self.assertEqual(filter_rows(rows, 'x', fields=('name', 'email')), [])

    def test_input_is_not_mutated(self):
        before = copy.deepcopy(self.items)
        result = filter_rows(self.items, 'widget')

        self.assertEqual(self.items, before)
        self.assertIsNot(result, self.items)

    def test_is_active_facet(self):
        self.assertTrue(is_active_facet('Tools'))
        self.assertTrue(is_active_facet(0))
        self.assertFalse(is_active_facet('  '))

    def test_facet_values(self):
        rows = self.items + [{'category': 'Tools'}, {'category': None}]
        self.assertEqual(facet_values(rows, 'category'), ['Electronics', 'Tools'])


if __name__ == '__main__':
    unittest.main()
