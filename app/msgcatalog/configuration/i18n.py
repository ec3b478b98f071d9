"""Message catalog settings."""

from pydantic import Field

from msgcatalog.configuration.base import InfrastructureSettings


class I18nSettings(InfrastructureSettings):
    """Locations and naming of the on-disk message catalogs.

    Environment Variables:
        I18N_DATA_DIR: Base data folder (default: data)
        I18N_LANGUAGE_FOLDER: Sub-folder holding catalog files (default: language)
        I18N_SETTINGS_FILE: Locale settings file in the data folder (default: language.yml)
        I18N_SOURCE_SUFFIX: Suffix stripped from file names to derive codes
        I18N_SEED_DEFAULTS: Copy bundled defaults into an empty data folder

    Layout:
        <data_dir>/language.yml
        <data_dir>/language/en_us.lang.yml
        <data_dir>/language/en_gb.lang.yml

    Example:
        ```python
        from pathlib import Path

        from msgcatalog.configuration import settings

        language_dir = Path(settings.i18n.data_dir) / settings.i18n.language_folder
        ```
    """

    data_dir: str = Field(
        default="data",
        alias="I18N_DATA_DIR",
        description="Base data folder containing the settings file and language folder",
    )
    language_folder: str = Field(
        default="language",
        alias="I18N_LANGUAGE_FOLDER",
        description="Folder (relative to data_dir) holding catalog files",
    )
    settings_file: str = Field(
        default="language.yml",
        alias="I18N_SETTINGS_FILE",
        description="Locale settings file name (relative to data_dir)",
    )
    source_suffix: str = Field(
        default=".lang.yml",
        alias="I18N_SOURCE_SUFFIX",
        description="File name suffix identifying catalog files",
    )
    seed_defaults: bool = Field(
        default=True,
        alias="I18N_SEED_DEFAULTS",
        description="Copy bundled default files before the first reload",
    )
