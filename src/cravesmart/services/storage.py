"""Key-value persistence interface."""

from typing import Protocol

ACCOUNTS_KEY = "craveSmart_db"
THEME_KEY = "craveSmartTheme"


class KeyValueStore(Protocol):
    """Persistence interface for string values under fixed keys."""

    def get(self, key: str) -> str | None:
        """Return the stored value for a key, if present."""

    def set(self, key: str, value: str) -> None:
        """Store a value under a key, replacing any previous value."""
