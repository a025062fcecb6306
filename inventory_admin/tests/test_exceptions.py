"""
Unit tests for the error taxonomy and exception logging.
"""
import unittest

from inventory_admin.exceptions import InventoryAdminError, NotFoundError, ValidationError
from inventory_admin.logging_setup import log_exception, setup_logging


class TestInventoryAdminError(unittest.TestCase):

    def test_to_dict_includes_code_and_details(self):
        error = NotFoundError("No products row with id 7", code='PGRST116', details={'id': 7})

        self.assertEqual(error.to_dict(), {
            'error': 'NotFoundError',
            'message': 'No products row with id 7',
            'code': 'PGRST116',
            'details': {'id': 7}
        })
        self.assertEqual(str(error), "[PGRST116] No products row with id 7")

    def test_to_dict_omits_empty_fields(self):
        self.assertEqual(ValidationError("bad facet").to_dict(),
                         {'error': 'ValidationError', 'message': 'bad facet'})
        self.assertEqual(InventoryAdminError().message, "An error occurred in Inventory Admin")


class TestLogException(unittest.TestCase):

    def test_app_logger_is_named_app(self):
        self.assertEqual(setup_logging().app_logger.name, 'app')

    def test_log_exception_records_message_and_traceback(self):
        with self.assertLogs('app', level='ERROR') as logs:
            try:
                raise ValidationError("bad facet")
            except ValidationError as e:
                log_exception('app', e, "Command list failed")

        self.assertEqual(logs.output[0], "ERROR:app:Command list failed: bad facet")
        self.assertIn('Traceback', logs.output[1])


if __name__ == '__main__':
    unittest.main()
