"""i18n system - hierarchical, hot-reloadable message catalogs.

Resolves message keys for consoles, users and anonymous audiences,
following parent/child catalog inheritance.

Main components:
- models: Catalog, RawSource, LocaleSettings
- loader: CatalogLoader (parent-ordered batch builds)
- sources: SourceProvider and YAMLSourceProvider
- registry: CatalogRegistry with atomic snapshot reload
- resolvers: AudienceResolver for audience-to-catalog selection
- translator: Translator for formatting, sending and broadcasting
- service: LanguageManager facade
"""

from msgcatalog.i18n.audiences import (
    CONSOLE,
    Audience,
    AudienceDirectory,
    AudienceKind,
    ConsoleAudience,
    MessageSink,
    UnidentifiedAudience,
    UserAudience,
)
from msgcatalog.i18n.cache import InMemoryLocaleCache, LocaleCache
from msgcatalog.i18n.errors import (
    CatalogError,
    CyclicParentError,
    InvalidSourceError,
    MissingParentError,
)
from msgcatalog.i18n.factory import create_language_manager
from msgcatalog.i18n.loader import CatalogLoader, LoadResult
from msgcatalog.i18n.models import (
    DEFAULT_LOCALE_SENTINEL,
    Catalog,
    LocaleSettings,
    RawSource,
)
from msgcatalog.i18n.registry import CatalogRegistry, RegistrySnapshot
from msgcatalog.i18n.resolvers import AudienceResolver
from msgcatalog.i18n.service import LanguageManager
from msgcatalog.i18n.sources import SourceProvider, YAMLSourceProvider
from msgcatalog.i18n.translator import Translator, interpolation_replacer

__all__ = [
    "Audience",
    "AudienceDirectory",
    "AudienceKind",
    "AudienceResolver",
    "CONSOLE",
    "Catalog",
    "CatalogError",
    "CatalogLoader",
    "CatalogRegistry",
    "ConsoleAudience",
    "CyclicParentError",
    "DEFAULT_LOCALE_SENTINEL",
    "InMemoryLocaleCache",
    "InvalidSourceError",
    "LanguageManager",
    "LoadResult",
    "LocaleCache",
    "LocaleSettings",
    "MessageSink",
    "MissingParentError",
    "RawSource",
    "RegistrySnapshot",
    "SourceProvider",
    "Translator",
    "UnidentifiedAudience",
    "UserAudience",
    "YAMLSourceProvider",
    "create_language_manager",
    "interpolation_replacer",
]
