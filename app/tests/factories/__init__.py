"""Test data factories for deterministic test data generation."""

from tests.factories.i18n import (
    RecordingSink,
    StaticDirectory,
    make_catalog,
    make_locale_settings,
    make_permission_check,
    make_raw_source,
    make_registry,
    make_standard_sources,
)

__all__ = [
    "RecordingSink",
    "StaticDirectory",
    "make_catalog",
    "make_locale_settings",
    "make_permission_check",
    "make_raw_source",
    "make_registry",
    "make_standard_sources",
]
