import os
import configparser
from pathlib import Path

DEFAULT_CONFIG_PATH = Path('config') / 'settings.ini'


class Config:
    """Configuration manager for Inventory Admin.

    Values come from an INI file. When the file does not exist the built-in
    defaults are used and nothing is written until ``save()`` is called.
    """

    def __init__(self, path=None):
        self._config_path = Path(path or os.getenv('INVENTORY_ADMIN_CONFIG') or DEFAULT_CONFIG_PATH)
        self._config = configparser.ConfigParser(interpolation=None)
        self._load_defaults()

        if self._config_path.exists():
            self._config.read(self._config_path)

    def _load_defaults(self):
        """Populate the built-in default sections."""
        self._config['DATABASE'] = {
            'type': 'supabase',
            'url': 'sqlite:///inventory_admin.db',
            'echo': 'False'
        }

        self._config['SUPABASE'] = {
            'url': '',
            'key': ''
        }

        self._config['LOGGING'] = {
            'level': 'INFO',
            'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            'directory': 'logs',
            'max_size_mb': '10',
            'backup_count': '5',
            'console_output': 'True'
        }

        self._config['DASHBOARD'] = {
            'low_stock_threshold': '10'
        }

        self._config['DISPLAY'] = {
            'preferences_file': str(Path('config') / 'preferences.ini')
        }

    @property
    def path(self):
        return self._config_path

    def save(self):
        """Save configuration to file."""
        self._config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._config_path, 'w') as configfile:
            self._config.write(configfile)

    def get(self, section, key, default=None):
        """Get configuration value."""
        try:
            return self._config.get(section, key)
        except (configparser.NoSectionError, configparser.NoOptionError):
            return default

    def get_int(self, section, key, default=None):
        """Get configuration value as integer."""
        try:
            return self._config.getint(section, key)
        except (configparser.NoSectionError, configparser.NoOptionError, ValueError):
            return default

    def get_float(self, section, key, default=None):
        """Get configuration value as float."""
        try:
            return self._config.getfloat(section, key)
        except (configparser.NoSectionError, configparser.NoOptionError, ValueError):
            return default

    def get_boolean(self, section, key, default=None):
        """Get configuration value as boolean."""
        try:
            return self._config.getboolean(section, key)
        except (configparser.NoSectionError, configparser.NoOptionError, ValueError):
            return default

    def set(self, section, key, value):
        """Set configuration value and persist it."""
        if not self._config.has_section(section):
            self._config.add_section(section)

        self._config.set(section, key, str(value))
        self.save()

    @property
    def db_type(self):
        """Backend type, with any trailing inline comment removed."""
        db_type = self.get('DATABASE', 'type', 'supabase').lower()
        return db_type.split('#')[0].strip()

    @property
    def supabase_config(self):
        """Get Supabase credentials; environment variables take precedence."""
        if os.getenv('SUPABASE_URL') and os.getenv('SUPABASE_KEY'):
            return {
                'url': os.getenv('SUPABASE_URL'),
                'key': os.getenv('SUPABASE_KEY')
            }

        return {
            'url': self.get('SUPABASE', 'url', ''),
            'key': self.get('SUPABASE', 'key', '')
        }

    @property
    def log_config(self):
        """Get logging configuration."""
        return {
            'level': self.get('LOGGING', 'level', 'INFO'),
            'format': self.get('LOGGING', 'format', '%(asctime)s - %(name)s - %(levelname)s - %(message)s'),
            'directory': self.get('LOGGING', 'directory', 'logs'),
            'max_size_mb': self.get_int('LOGGING', 'max_size_mb', 10),
            'backup_count': self.get_int('LOGGING', 'backup_count', 5),
            'console_output': self.get_boolean('LOGGING', 'console_output', True)
        }

    @property
    def dashboard_config(self):
        """Get dashboard configuration."""
        return {
            'low_stock_threshold': self.get_int('DASHBOARD', 'low_stock_threshold', 10)
        }

    @property
    def preferences_file(self):
        return Path(self.get('DISPLAY', 'preferences_file', str(Path('config') / 'preferences.ini')))

# Global config instance
config = Config()
