"""
Unit tests for configuration loading.
"""
import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from inventory_admin.config import Config


class TestConfig(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = Path(self.tmp.name) / 'settings.ini'

    def tearDown(self):
        self.tmp.cleanup()

    def test_defaults_without_file(self):
        config = Config(self.path)

        self.assertEqual(config.db_type, 'supabase')
        self.assertEqual(config.dashboard_config['low_stock_threshold'], 10)
        self.assertEqual(config.log_config['level'], 'INFO')
        self.assertFalse(self.path.exists())

    def test_file_overrides_defaults(self):
        self.path.write_text(
            "[DATABASE]\ntype = sqlite  # local runs\nurl = sqlite://\n"
            "[DASHBOARD]\nlow_stock_threshold = 3\n"
        )
        config = Config(self.path)

        self.assertEqual(config.db_type, 'sqlite')
        self.assertEqual(config.get('DATABASE', 'url'), 'sqlite://')
        self.assertEqual(config.dashboard_config['low_stock_threshold'], 3)

    def test_set_persists(self):
        config = Config(self.path)
        config.set('SUPABASE', 'url', 'https://example.supabase.co')

        self.assertEqual(Config(self.path).get('SUPABASE', 'url'), 'https://example.supabase.co')

    def test_typed_getters_fall_back(self):
        config = Config(self.path)
        self.assertEqual(config.get_int('DATABASE', 'type', 5), 5)
        self.assertEqual(config.get_float('NOPE', 'x', 1.5), 1.5)
        self.assertIsNone(config.get_boolean('DATABASE', 'missing'))

    def test_environment_credentials_win(self):
        config = Config(self.path)
        config.set('SUPABASE', 'url', 'https://file.supabase.co')
        config.set('SUPABASE', 'key', 'file-key')

        with patch.dict(os.environ, {'SUPABASE_URL': 'https://env.supabase.co', 'SUPABASE_KEY': 'env-key'}):
            self.assertEqual(config.supabase_config, {'url': 'https://env.supabase.co', 'key': 'env-key'})

        with patch.dict(os.environ, {'SUPABASE_URL': '', 'SUPABASE_KEY': ''}):
            self.assertEqual(config.supabase_config, {'url': 'https://file.supabase.co', 'key': 'file-key'})


if __name__ == '__main__':
    unittest.main()
