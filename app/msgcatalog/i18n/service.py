"""Language manager service.

Class-based facade over the catalog engine: reloads catalogs from a source
provider and resolves, sends and broadcasts messages for audiences.
"""

from pathlib import Path
from typing import List, Optional

from msgcatalog.i18n.audiences import Audience, Replacer
from msgcatalog.i18n.models import Catalog
from msgcatalog.i18n.registry import CatalogRegistry
from msgcatalog.i18n.resolvers import AudienceResolver
from msgcatalog.i18n.sources import SourceProvider, YAMLSourceProvider
from msgcatalog.i18n.translator import Translator
from msgcatalog.logging import get_module_logger

logger = get_module_logger()


class LanguageManager:
    """Facade over registry, resolver and translator.

    This is a thin facade - lookups are delegated to the registry snapshot,
    audience selection to the AudienceResolver and formatting to the
    Translator.

    Usage:
        manager = create_language_manager()
        manager.reload()

        text = manager.resolve_message(UserAudience("u-1"), "greeting")
        manager.send_message(CONSOLE, "reload.done", color=True)
        manager.broadcast_message("event.start", permission="event.notify")
    """

    def __init__(
        self,
        provider: SourceProvider,
        registry: CatalogRegistry,
        translator: Translator,
    ):
        """Initialize language manager.

        Args:
            provider: Supplier of catalog sources and locale settings.
            registry: Registry holding the published catalogs.
            translator: Translator bound to a resolver over the same registry.
        """
        self.provider = provider
        self.registry = registry
        self.translator = translator

    @property
    def resolver(self) -> AudienceResolver:
        return self.translator.resolver

    def save_default_files(self, bundled_dir: Path) -> List[Path]:
        """Seed the provider's storage with bundled default files.

        Only supported by YAMLSourceProvider; other providers own their
        storage.

        Returns:
            Paths of the files written.
        """
        if not isinstance(self.provider, YAMLSourceProvider):
            logger.debug(
                "default_files_not_supported",
                provider=type(self.provider).__name__,
            )
            return []
        return self.provider.save_default_files(bundled_dir)

    def reload(self) -> int:
        """Reload all catalogs and settings and publish them atomically.

        Returns:
            Number of catalogs loaded.
        """
        sources = self.provider.load_sources()
        settings = self.provider.load_settings()
        return self.registry.reload(sources, settings)

    def resolve_catalog(self, audience: Optional[Audience]) -> Optional[Catalog]:
        return self.resolver.resolve(audience)

    def resolve_message(
        self,
        audience: Optional[Audience],
        key: str,
        replacer: Optional[Replacer] = None,
        color: bool = False,
    ) -> str:
        """Resolve a message for an audience; "" when unavailable."""
        return self.translator.resolve_message(audience, key, replacer, color)

    def send_message(
        self,
        audience: Audience,
        key: str,
        replacer: Optional[Replacer] = None,
        color: bool = False,
    ) -> bool:
        """Resolve a message and deliver it; empty messages are not sent."""
        return self.translator.send_message(audience, key, replacer, color)

    def broadcast_message(
        self,
        key: str,
        replacer: Optional[Replacer] = None,
        color: bool = False,
        permission: Optional[str] = None,
    ) -> int:
        """Send a message to every connected audience holding permission."""
        return self.translator.broadcast_message(key, replacer, color, permission)

    def get_default_catalog(self) -> Optional[Catalog]:
        return self.registry.get_default()

    def get_console_catalog(self) -> Optional[Catalog]:
        return self.registry.get_console()

    def get_catalog(self, code: Optional[str]) -> Optional[Catalog]:
        return self.registry.get_by_code(code)

    def is_force_default(self) -> bool:
        return self.registry.is_force_default()

    def get_available_codes(self) -> List[str]:
        return self.registry.codes()
