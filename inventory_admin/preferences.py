# inventory_admin/preferences.py
import os
import configparser
import logging
from pathlib import Path
from typing import Callable, Optional

logger = logging.getLogger(__name__)

SECTION = 'DISPLAY'
KEY = 'dark_mode'


def system_prefers_dark() -> bool:
    """OS-level color scheme, from the terminal's COLORFGBG background.

    ``COLORFGBG`` is "<fg>;<bg>" (sometimes "<fg>;default;<bg>"); background
    colors 0-6 and 8 are the dark half of the 16-color palette.
    """
    value = os.getenv('COLORFGBG', '')
    background = value.split(';')[-1].strip()
    if not background.isdigit():
        return False
    return int(background) in (0, 1, 2, 3, 4, 5, 6, 8)


class ThemePreference:
    """Light/dark display mode persisted in a local INI file.

    The saved value wins; with nothing saved the OS preference decides.
    Every change is written immediately.
    """

    def __init__(self, path, system_preference: Optional[Callable[[], bool]] = None):
        self._path = Path(path)
        self._system_preference = system_preference or system_prefers_dark
        self._config = configparser.ConfigParser(interpolation=None)

        saved = self._read_saved()
        self._dark_mode = saved if saved is not None else self._system_preference()

    def _read_saved(self) -> Optional[bool]:
        if not self._path.exists():
            return None

        self._config.read(self._path)
        try:
            return self._config.getboolean(SECTION, KEY)
        except (configparser.NoSectionError, configparser.NoOptionError):
            return None
        except ValueError:
            logger.warning(f"Ignoring invalid {KEY} value in {self._path}")
            return None

    def _save(self):
        if not self._config.has_section(SECTION):
            self._config.add_section(SECTION)
        self._config.set(SECTION, KEY, str(self._dark_mode))

        self._path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._path, 'w') as prefs_file:
            self._config.write(prefs_file)

    @property
    def dark_mode(self) -> bool:
        return self._dark_mode

    @property
    def is_saved(self) -> bool:
        return self._read_saved() is not None

    @property
    def theme(self) -> str:
        return 'dark' if self._dark_mode else 'light'

    def set(self, dark_mode: bool) -> bool:
        self._dark_mode = bool(dark_mode)
        self._save()
        return self._dark_mode

    def toggle(self) -> bool:
        """Flip the display mode and save it."""
        return self.set(not self._dark_mode)
