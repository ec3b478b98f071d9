"""Catalog models for the message catalog engine.

Defines the language catalog, the raw source records the loader consumes and
the locale settings published alongside each catalog batch.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Locale code meaning "whatever the default catalog is"
DEFAULT_LOCALE_SENTINEL = "default"


class Catalog:
    """One named language variant with optional parent fallback.

    Entries are written only while the loader builds the catalog. Once
    sealed, the catalog is read-only and safe to share between threads.

    Attributes:
        code: Unique catalog code (e.g., "en_us").
        parent: Already-built parent catalog, or None for a root catalog.
    """

    __slots__ = ("_code", "_parent", "_entries", "_sealed")

    def __init__(self, code: str, parent: Optional["Catalog"] = None):
        if not code:
            raise ValueError("Catalog code must not be empty")
        self._code = code
        self._parent = parent
        self._entries: Dict[str, str] = {}
        self._sealed = False

    @property
    def code(self) -> str:
        return self._code

    @property
    def parent(self) -> Optional["Catalog"]:
        return self._parent

    @property
    def sealed(self) -> bool:
        return self._sealed

    def set_entry(self, key: str, value: str) -> None:
        """Insert or overwrite a translation while the catalog is being built.

        Args:
            key: Message key.
            value: Raw translated message.

        Raises:
            RuntimeError: If the catalog has already been sealed.
        """
        if self._sealed:
            raise RuntimeError(f"Catalog {self._code} is sealed and cannot be modified")
        self._entries[key] = value

    def seal(self) -> None:
        """Mark the catalog read-only."""
        self._sealed = True

    def get_entry(self, key: str) -> Optional[str]:
        """Return this catalog's own value for key, ignoring parents."""
        return self._entries.get(key)

    def has_entry(self, key: str) -> bool:
        """Check whether this catalog itself defines key."""
        return key in self._entries

    def keys(self) -> List[str]:
        return list(self._entries)

    def resolve(self, key: str) -> str:
        """Resolve a key through this catalog and its parent chain.

        The nearest catalog that defines the key wins. A key that no
        catalog in the chain defines resolves to an empty string.

        Args:
            key: Message key.

        Returns:
            Raw message string, or "" when no translation exists.
        """
        catalog: Optional[Catalog] = self
        while catalog is not None:
            value = catalog._entries.get(key)
            if value is not None:
                return value
            catalog = catalog._parent
        return ""

    def lineage(self) -> List[str]:
        """Return catalog codes from this catalog up to its root."""
        codes = []
        catalog: Optional[Catalog] = self
        while catalog is not None:
            codes.append(catalog._code)
            catalog = catalog._parent
        return codes

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        parent_code = self._parent.code if self._parent is not None else None
        return (
            f"Catalog(code={self._code!r}, parent={parent_code!r}, "
            f"entries={len(self._entries)})"
        )


@dataclass
class RawSource:
    """Unparsed input for one catalog.

    Attributes:
        code: Catalog code derived from the source name, or None when the
            name could not be turned into a code.
        parent_code: Declared parent catalog code, if any.
        entries: Flat (key, value) pairs. Values are strings, lists of
            strings (multi-line messages) or None.
        origin: Where the source came from (file path), for logging.
    """

    code: Optional[str]
    parent_code: Optional[str] = None
    entries: List[Tuple[str, Any]] = field(default_factory=list)
    origin: Optional[str] = None

    def iter_entries(self) -> Iterator[Tuple[str, Any]]:
        return iter(self.entries)


class LocaleSettings(BaseModel):
    """Audience-selection settings published with each catalog batch.

    Field aliases match the keys of the on-disk settings file, so a parsed
    document can be validated directly:

        LocaleSettings.model_validate({"default-locale": "en_us"})

    Attributes:
        default_locale: Code of the default catalog.
        console_locale: Code of the catalog used for the console.
        force_default: When true, every audience gets the default catalog.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )

    default_locale: Optional[str] = Field(default=None, alias="default-locale")
    console_locale: Optional[str] = Field(default=None, alias="console-locale")
    force_default: bool = Field(default=False, alias="enforce-default-locale")

    @field_validator("default_locale", "console_locale", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    @field_validator("force_default", mode="before")
    @classmethod
    def _none_to_false(cls, value: Any) -> Any:
        return False if value is None else value
