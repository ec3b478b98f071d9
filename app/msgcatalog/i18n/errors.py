"""Exceptions raised while building message catalogs.

All of these describe a problem with one catalog source. The loader catches
them, logs a warning and drops only the offending source.
"""

from typing import Optional


class CatalogError(Exception):
    """Base class for catalog configuration errors.

    Attributes:
        code: Code of the offending source, if one could be derived.
        origin: Where the source came from (e.g., file path).
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        origin: Optional[str] = None,
    ):
        super().__init__(message)
        self.code = code
        self.origin = origin


class InvalidSourceError(CatalogError):
    """Source is structurally unusable (no code, unreadable, not a mapping)."""


class MissingParentError(CatalogError):
    """Declared parent was not built earlier in the same batch."""

    def __init__(
        self,
        code: str,
        parent_code: str,
        origin: Optional[str] = None,
    ):
        super().__init__(
            f"Parent catalog '{parent_code}' of '{code}' is not loaded",
            code=code,
            origin=origin,
        )
        self.parent_code = parent_code


class CyclicParentError(CatalogError):
    """Parent chain of a source loops back on itself."""

    def __init__(
        self,
        code: str,
        parent_code: str,
        origin: Optional[str] = None,
    ):
        super().__init__(
            f"Parent chain of '{code}' (via '{parent_code}') is cyclic",
            code=code,
            origin=origin,
        )
        self.parent_code = parent_code
