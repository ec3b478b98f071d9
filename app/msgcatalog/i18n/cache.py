"""Per-user locale cache.

Hosts record the locale each connected user reports (typically from the
client's settings) and the audience resolver reads it back when choosing a
catalog.
"""

import threading
from abc import ABC, abstractmethod
from typing import Dict, Optional

from msgcatalog.logging import get_module_logger

logger = get_module_logger()


def normalize_locale(locale: Optional[str]) -> Optional[str]:
    """Normalize a reported locale to catalog code form.

    Clients report tags like "en-US"; catalog codes look like "en_us".

    Args:
        locale: Reported locale string.

    Returns:
        Lower-case, underscore-separated code, or None for blank input.
    """
    if locale is None:
        return None
    normalized = locale.strip().replace("-", "_").lower()
    return normalized or None


class LocaleCache(ABC):
    """Abstract per-user locale lookup."""

    @abstractmethod
    def lookup(self, user_id: str) -> Optional[str]:
        """Return the cached locale code for user_id, or None."""
        pass

    @abstractmethod
    def store(self, user_id: str, locale: Optional[str]) -> None:
        """Record the locale reported by user_id."""
        pass

    @abstractmethod
    def evict(self, user_id: str) -> None:
        """Forget user_id (e.g., on disconnect)."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Forget every user."""
        pass


class InMemoryLocaleCache(LocaleCache):
    """Thread-safe in-process locale cache."""

    def __init__(self) -> None:
        self._locales: Dict[str, str] = {}
        self._lock = threading.Lock()

    def lookup(self, user_id: str) -> Optional[str]:
        with self._lock:
            return self._locales.get(user_id)

    def store(self, user_id: str, locale: Optional[str]) -> None:
        """Record a reported locale; a blank locale evicts the user."""
        code = normalize_locale(locale)
        with self._lock:
            if code is None:
                self._locales.pop(user_id, None)
            else:
                self._locales[user_id] = code
        logger.debug("cached_user_locale", user_id=user_id, locale=code)

    def evict(self, user_id: str) -> None:
        with self._lock:
            self._locales.pop(user_id, None)

    def clear(self) -> None:
        with self._lock:
            self._locales.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._locales)
