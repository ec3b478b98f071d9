"""Catalog registry with atomic hot reload.

The registry publishes immutable snapshots. Each snapshot bundles the
catalog map with the locale settings read in the same reload cycle, so a
reader never pairs catalogs from one generation with settings from another.
Readers take no locks; reload builds a new snapshot aside and swaps a single
reference.
"""

import threading
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from msgcatalog.i18n.loader import CatalogLoader, LoadResult
from msgcatalog.i18n.models import (
    DEFAULT_LOCALE_SENTINEL,
    Catalog,
    LocaleSettings,
    RawSource,
)
from msgcatalog.logging import get_module_logger

logger = get_module_logger()


@dataclass(frozen=True)
class RegistrySnapshot:
    """One published generation of catalogs and settings.

    Attributes:
        catalogs: Read-only mapping of code to sealed Catalog.
        settings: Locale settings read with this batch.
        generation: Publish counter; 0 is the initial empty snapshot.
    """

    catalogs: Mapping[str, Catalog] = field(
        default_factory=lambda: MappingProxyType({})
    )
    settings: LocaleSettings = field(default_factory=LocaleSettings)
    generation: int = 0

    def get_default(self) -> Optional[Catalog]:
        """Return the default catalog, or None if it is not configured or loaded."""
        code = self.settings.default_locale
        if code is None:
            return None
        catalog = self.catalogs.get(code)
        if catalog is None:
            logger.warning(
                "default_catalog_missing",
                default_locale=code,
                generation=self.generation,
            )
        return catalog

    def get_console(self) -> Optional[Catalog]:
        """Return the console catalog, or None if it is not configured or loaded."""
        code = self.settings.console_locale
        if code is None:
            return None
        catalog = self.catalogs.get(code)
        if catalog is None:
            logger.warning(
                "console_catalog_missing",
                console_locale=code,
                generation=self.generation,
            )
        return catalog

    def get_by_code(self, code: Optional[str]) -> Optional[Catalog]:
        """Look up a catalog by code, degrading to the default catalog.

        Empty codes, None and the "default" sentinel resolve to the default
        catalog, as do codes that match no loaded catalog.

        Args:
            code: Catalog code.

        Returns:
            Matching catalog, else the default catalog, else None.
        """
        if not code or code == DEFAULT_LOCALE_SENTINEL:
            return self.get_default()
        catalog = self.catalogs.get(code)
        if catalog is None:
            return self.get_default()
        return catalog


class CatalogRegistry:
    """Holds the current catalog snapshot and rebuilds it on reload.

    Reads go through ``snapshot()`` and never block. ``reload()`` may run
    while reads are in flight; concurrent reloads are serialized on publish
    and the last one to publish wins.

    Usage:
        registry = CatalogRegistry()
        count = registry.reload(provider.load_sources(), provider.load_settings())
        catalog = registry.get_by_code("en_gb")
    """

    def __init__(self, loader: Optional[CatalogLoader] = None):
        self.loader = loader or CatalogLoader()
        self._snapshot = RegistrySnapshot()
        self._publish_lock = threading.Lock()

    def snapshot(self) -> RegistrySnapshot:
        """Return the currently published snapshot."""
        return self._snapshot

    def reload(
        self,
        sources: Iterable[RawSource],
        settings: Optional[LocaleSettings] = None,
    ) -> int:
        """Rebuild all catalogs and publish them with new settings.

        Args:
            sources: Raw catalog sources for this cycle.
            settings: Locale settings for this cycle; defaults when omitted.

        Returns:
            Number of catalogs loaded.
        """
        result = self.loader.load(sources)
        return self.publish(result, settings or LocaleSettings())

    def publish(self, result: LoadResult, settings: LocaleSettings) -> int:
        """Publish a built batch as the next snapshot.

        Args:
            result: Loader output.
            settings: Locale settings to publish with the batch.

        Returns:
            Number of catalogs published.
        """
        catalogs = MappingProxyType(dict(result.catalogs))
        with self._publish_lock:
            snapshot = RegistrySnapshot(
                catalogs=catalogs,
                settings=settings,
                generation=self._snapshot.generation + 1,
            )
            self._snapshot = snapshot

        for name, code in (
            ("default_locale", settings.default_locale),
            ("console_locale", settings.console_locale),
        ):
            if code is not None and code not in catalogs:
                logger.warning("configured_locale_not_loaded", setting=name, code=code)

        logger.info(
            "catalogs_reloaded",
            catalog_count=len(catalogs),
            failure_count=len(result.failures),
            generation=snapshot.generation,
            default_locale=settings.default_locale,
            console_locale=settings.console_locale,
            force_default=settings.force_default,
        )
        return len(catalogs)

    def get_default(self) -> Optional[Catalog]:
        return self._snapshot.get_default()

    def get_console(self) -> Optional[Catalog]:
        return self._snapshot.get_console()

    def get_by_code(self, code: Optional[str]) -> Optional[Catalog]:
        return self._snapshot.get_by_code(code)

    def is_force_default(self) -> bool:
        return self._snapshot.settings.force_default

    def codes(self) -> list:
        """Return the codes of all loaded catalogs, sorted."""
        return sorted(self._snapshot.catalogs)
