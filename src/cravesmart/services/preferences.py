"""Theme preference storage."""

from dataclasses import dataclass
from enum import StrEnum

from cravesmart.services.storage import THEME_KEY, KeyValueStore


class Theme(StrEnum):
    """Colour theme of the client."""

    DARK = "dark"
    LIGHT = "light"


@dataclass
class ThemeService:
    """Reads and writes the theme string."""

    store: KeyValueStore

    def get_theme(self) -> Theme:
        """Return the stored theme; anything but "dark" means light."""
        if self.store.get(THEME_KEY) == Theme.DARK:
            return Theme.DARK
        return Theme.LIGHT

    def set_theme(self, theme: Theme) -> Theme:
        """Persist the theme and return it."""
        self.store.set(THEME_KEY, str(theme))
        return theme

    def toggle(self) -> Theme:
        """Flip between dark and light."""
        current = self.get_theme()
        return self.set_theme(Theme.LIGHT if current is Theme.DARK else Theme.DARK)
