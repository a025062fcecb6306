"""
Unit tests for the command-line front end.
"""
import io
import json
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest.mock import patch

from inventory_admin import main
from inventory_admin.exceptions import ConfigError, ValidationError


class TestArgumentParsing(unittest.TestCase):

    def test_parse_assignments(self):
        values = main.parse_assignments(['name=Widget A', 'price=9.5', 'quantity=3', 'category=Tools'])
        self.assertEqual(values, {'name': 'Widget A', 'price': 9.5, 'quantity': 3, 'category': 'Tools'})

    def test_parse_assignments_rejects_missing_equals(self):
        with self.assertRaises(ValidationError):
            main.parse_assignments(['name'])

    def test_parse_facets_keeps_text(self):
        self.assertEqual(main.parse_facets(['category=2024', 'status=Active']),
                         {'category': '2024', 'status': 'Active'})
        with self.assertRaises(ValidationError):
            main.parse_facets(['=Tools'])

    def test_parse_id(self):
        self.assertEqual(main.parse_id('42'), 42)
        self.assertEqual(main.parse_id('6f1c-uuid'), '6f1c-uuid')

    def test_list_command(self):
        args = main.build_parser().parse_args(['list', 'products', '-s', 'widget', '-f', 'category=Tools'])
        self.assertEqual(args.command, 'list')
        self.assertEqual(args.entity, 'products')
        self.assertEqual(args.facet, ['category=Tools'])


class TestCommands(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        root = Path(self.tmp.name)
        self.settings = root / 'settings.ini'
        self.settings.write_text(
            "[DATABASE]\ntype = sqlite\nurl = sqlite:///%s\n"
            "[LOGGING]\ndirectory =\nconsole_output = False\n"
            "[DISPLAY]\npreferences_file = %s\n" % (root / 'inventory.db', root / 'preferences.ini')
        )

    def tearDown(self):
        self.tmp.cleanup()

    def run_cli(self, *argv):
        out = io.StringIO()
        with redirect_stdout(out), self.assertRaises(SystemExit) as ctx:
            main.main(['--config', str(self.settings)] + list(argv))
        return ctx.exception.code, out.getvalue()

    def test_create_then_list(self):
        code, _ = self.run_cli('create', 'suppliers', '--set', 'name=Acme', '--set', 'email=a@acme.example',
                               '--set', 'phone=555', '--set', 'address=1 Way')
        self.assertEqual(code, 0)

        code, output = self.run_cli('list', 'suppliers', '-s', 'acme')
        self.assertEqual(code, 0)
        self.assertIn('"name": "Acme"', output)

    def test_delete_missing_row_fails(self):
        code, _ = self.run_cli('delete', 'products', '99')
        self.assertEqual(code, 1)

    def test_numeric_looking_facet_matches_text_column(self):
        code, _ = self.run_cli('create', 'suppliers', '--set', 'name=Acme', '--set', 'email=a@acme.example',
                               '--set', 'phone=555', '--set', 'address=1 Way')
        self.assertEqual(code, 0)
        code, _ = self.run_cli('create', 'products', '--set', 'name=Calendar', '--set', 'sku=CAL-1',
                               '--set', 'category="2024"', '--set', 'supplier_id=1')
        self.assertEqual(code, 0)

        code, output = self.run_cli('list', 'products', '-f', 'category=2024')
        self.assertEqual(code, 0)
        self.assertIn('"sku": "CAL-1"', output)

    def test_application_error_is_logged_and_reported(self):
        self.settings.write_text("[DATABASE]\ntype = mongodb\n[LOGGING]\ndirectory =\nconsole_output = False\n")
        err = io.StringIO()

        with patch.object(main, 'log_exception') as log_exception, redirect_stderr(err):
            code, _ = self.run_cli('stats')

        self.assertEqual(code, 1)
        logger_name, exc, message = log_exception.call_args[0]
        self.assertEqual(logger_name, 'app')
        self.assertIsInstance(exc, ConfigError)
        self.assertIn('stats', message)
        self.assertEqual(json.loads(err.getvalue()),
                         {'error': 'ConfigError', 'message': 'Unknown database type: mongodb'})

    def test_theme_toggle(self):
        code, first = self.run_cli('theme', '--dark', 'off')
        self.assertEqual((code, first.strip()), (0, 'light'))

        code, second = self.run_cli('theme', '--toggle')
        self.assertEqual((code, second.strip()), (0, 'dark'))


if __name__ == '__main__':
    unittest.main()
