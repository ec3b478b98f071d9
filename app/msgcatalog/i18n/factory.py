"""Factory functions for creating i18n components.

Provides a convenience function for wiring a LanguageManager from the
application settings.
"""

from pathlib import Path
from typing import Optional

from msgcatalog.configuration import I18nSettings, settings
from msgcatalog.i18n.audiences import (
    AudienceDirectory,
    Colorizer,
    MessageSink,
    PermissionCheck,
)
from msgcatalog.i18n.cache import InMemoryLocaleCache, LocaleCache
from msgcatalog.i18n.registry import CatalogRegistry
from msgcatalog.i18n.resolvers import AudienceResolver
from msgcatalog.i18n.service import LanguageManager
from msgcatalog.i18n.sources import YAMLSourceProvider
from msgcatalog.i18n.translator import Translator
from msgcatalog.logging import get_module_logger

logger = get_module_logger()

# Bundled default settings and catalog files shipped with the package
BUNDLED_DEFAULTS_DIR = Path(__file__).resolve().parent / "defaults"


def create_language_manager(
    data_dir: Optional[Path] = None,
    i18n_settings: Optional[I18nSettings] = None,
    locale_cache: Optional[LocaleCache] = None,
    colorizer: Optional[Colorizer] = None,
    sink: Optional[MessageSink] = None,
    directory: Optional[AudienceDirectory] = None,
    permission_check: Optional[PermissionCheck] = None,
    preload: bool = True,
) -> LanguageManager:
    """Create and configure a LanguageManager instance.

    Args:
        data_dir: Data folder (default: settings.i18n.data_dir)
        i18n_settings: Catalog settings (default: settings.i18n)
        locale_cache: Per-user locale cache (default: new InMemoryLocaleCache)
        colorizer: Color renderer applied when color is requested
        sink: Delivery target for send/broadcast
        directory: Connected-audience listing for broadcast
        permission_check: Capability check for broadcast filtering
        preload: Whether to seed defaults and reload immediately (default: True)

    Returns:
        LanguageManager: Configured language manager

    Usage:
        # Use defaults from settings, load immediately
        manager = create_language_manager()

        # Custom data folder, lazy loading
        manager = create_language_manager(data_dir=Path("/srv/data"), preload=False)
        manager.reload()
    """
    i18n_settings = i18n_settings or settings.i18n
    data_dir = Path(data_dir) if data_dir is not None else Path(i18n_settings.data_dir)

    provider = YAMLSourceProvider(
        data_dir=data_dir,
        language_folder=i18n_settings.language_folder,
        settings_file=i18n_settings.settings_file,
        suffix=i18n_settings.source_suffix,
    )
    registry = CatalogRegistry()
    resolver = AudienceResolver(
        registry,
        locale_cache=locale_cache if locale_cache is not None else InMemoryLocaleCache(),
    )
    translator = Translator(
        resolver,
        colorizer=colorizer,
        sink=sink,
        directory=directory,
        permission_check=permission_check,
    )
    manager = LanguageManager(provider, registry, translator)

    if preload:
        if i18n_settings.seed_defaults:
            manager.save_default_files(BUNDLED_DEFAULTS_DIR)
        count = manager.reload()
        logger.info(
            "language_manager_created_with_preload",
            data_dir=str(data_dir),
            catalog_count=count,
        )
    else:
        logger.info("language_manager_created_lazy", data_dir=str(data_dir))

    return manager
