"""Feature-level fixtures for catalog engine tests.

Provides on-disk catalog folders, loaded registries and recording
collaborators for resolution and delivery scenarios.
"""

import pytest
import yaml

from msgcatalog.i18n import (
    AudienceResolver,
    CatalogRegistry,
    LanguageManager,
    Translator,
    UserAudience,
    YAMLSourceProvider,
)
from tests.factories.i18n import (
    RecordingSink,
    StaticDirectory,
    make_locale_settings,
    make_registry,
)


@pytest.fixture
def temp_data_dir(tmp_path):
    """Create a data folder with sample catalog files.

    Returns a directory structure like:
    - language.yml
    - language/en_us.lang.yml
    - language/en_gb.lang.yml   (parent: en_us)
    - language/fr_fr.lang.yml
    - language/fr_ca.lang.yml   (parent: fr_fr)
    """
    language_dir = tmp_path / "language"
    language_dir.mkdir()

    settings = {
        "default-locale": "en_us",
        "console-locale": "en_us",
        "enforce-default-locale": False,
    }
    with open(tmp_path / "language.yml", "w") as f:
        yaml.dump(settings, f)

    en_us = {
        "greeting": "Hello",
        "farewell": "Goodbye",
        "welcome": "Welcome, {player}!",
        "error": {
            "no-permission": "&cYou do not have permission.",
            "unknown-command": "&cUnknown command.",
        },
        "help": ["Line one", "Line two"],
    }
    with open(language_dir / "en_us.lang.yml", "w") as f:
        yaml.dump(en_us, f)

    en_gb = {
        "parent": "en_us",
        "error": {"unknown-command": "&cUnrecognised command."},
    }
    with open(language_dir / "en_gb.lang.yml", "w") as f:
        yaml.dump(en_gb, f)

    fr_fr = {
        "greeting": "Bonjour",
        "farewell": "Au revoir",
        "welcome": "Bienvenue, {player} !",
    }
    with open(language_dir / "fr_fr.lang.yml", "w", encoding="utf-8") as f:
        yaml.dump(fr_fr, f, allow_unicode=True)

    fr_ca = {"parent": "fr_fr", "farewell": "Bye-bye"}
    with open(language_dir / "fr_ca.lang.yml", "w") as f:
        yaml.dump(fr_ca, f)

    return tmp_path


@pytest.fixture
def yaml_provider(temp_data_dir):
    """Create YAMLSourceProvider for the temporary data folder."""
    return YAMLSourceProvider(temp_data_dir)


@pytest.fixture
def registry():
    """CatalogRegistry loaded with en_us, en_gb and fr_fr."""
    return make_registry()


@pytest.fixture
def resolver(registry, locale_cache):
    """AudienceResolver over the loaded registry."""
    return AudienceResolver(registry, locale_cache=locale_cache)


@pytest.fixture
def sink():
    """MessageSink recording every delivery."""
    return RecordingSink()


@pytest.fixture
def online_users():
    """Three connected users with different locales."""
    return [
        UserAudience("alice", cached_locale="en_us"),
        UserAudience("bruno", cached_locale="fr_fr"),
        UserAudience("carol", cached_locale="en_gb"),
    ]


@pytest.fixture
def translator(resolver, sink, online_users):
    """Translator with recording sink and the online users."""
    return Translator(
        resolver,
        colorizer=lambda message: message.replace("&", "§"),
        sink=sink,
        directory=StaticDirectory(online_users),
    )


@pytest.fixture
def manager(yaml_provider, locale_cache, sink, online_users):
    """LanguageManager over the temporary data folder, already reloaded."""
    registry = CatalogRegistry()
    resolver = AudienceResolver(registry, locale_cache=locale_cache)
    translator = Translator(
        resolver,
        sink=sink,
        directory=StaticDirectory(online_users),
    )
    manager = LanguageManager(yaml_provider, registry, translator)
    manager.reload()
    return manager


@pytest.fixture
def force_default_settings():
    """Locale settings with force-default enabled."""
    return make_locale_settings(force_default=True)
