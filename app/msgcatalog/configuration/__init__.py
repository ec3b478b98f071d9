"""Configuration module - public API.

Centralized configuration management using Pydantic BaseSettings.

Exports:
    settings: Singleton Settings instance (main configuration object)
    Settings: Main settings class (for testing/overrides)
    I18nSettings: Catalog location settings (for testing)

Example:
    ```python
    from msgcatalog.configuration import settings

    data_dir = settings.i18n.data_dir
    ```
"""

from msgcatalog.configuration.i18n import I18nSettings
from msgcatalog.configuration.settings import Settings, settings

__all__ = ["Settings", "I18nSettings", "settings"]
