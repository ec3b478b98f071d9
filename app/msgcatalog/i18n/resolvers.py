"""Audience-to-catalog resolution.

Chooses which catalog answers for an audience:
1. No audience, or force-default enabled: the default catalog
2. Console: the console catalog
3. User: the user's cached locale, via code lookup
4. Anything else: the default catalog
"""

from typing import Optional

from msgcatalog.i18n.audiences import Audience, AudienceKind
from msgcatalog.i18n.cache import LocaleCache, normalize_locale
from msgcatalog.i18n.models import Catalog
from msgcatalog.i18n.registry import CatalogRegistry, RegistrySnapshot
from msgcatalog.logging import get_module_logger

logger = get_module_logger()


class AudienceResolver:
    """Resolves the catalog that serves an audience.

    Stateless apart from its collaborators: every call reads one registry
    snapshot and, for users, one locale cache entry.

    Attributes:
        registry: Catalog registry to read snapshots from.
        locale_cache: Per-user locale cache, or None when the host keeps none.
    """

    def __init__(
        self,
        registry: CatalogRegistry,
        locale_cache: Optional[LocaleCache] = None,
    ):
        self.registry = registry
        self.locale_cache = locale_cache

    def resolve(
        self,
        audience: Optional[Audience],
        snapshot: Optional[RegistrySnapshot] = None,
    ) -> Optional[Catalog]:
        """Resolve the catalog for an audience.

        Args:
            audience: Audience to resolve for; None means unknown.
            snapshot: Snapshot to resolve against; the current one if omitted.

        Returns:
            Catalog for the audience, or None if no suitable catalog is loaded.
        """
        if snapshot is None:
            snapshot = self.registry.snapshot()
        kind = getattr(audience, "kind", None)

        if kind is None or snapshot.settings.force_default:
            return snapshot.get_default()

        if kind is AudienceKind.CONSOLE:
            return snapshot.get_console()

        if kind is AudienceKind.USER:
            locale = self.user_locale(audience)
            return snapshot.get_by_code(locale)

        return snapshot.get_default()

    def user_locale(self, audience: Audience) -> Optional[str]:
        """Return the locale code recorded for a user audience.

        The locale cache takes precedence over the locale carried by the
        audience itself. Both are normalized to catalog code form.
        """
        locale = None
        if self.locale_cache is not None:
            locale = normalize_locale(self.locale_cache.lookup(audience.user_id))
        if locale is None:
            locale = normalize_locale(audience.cached_locale)
        return locale
