"""msgcatalog - hierarchical, hot-reloadable message catalogs.

Resolves message keys to locale-specific strings for consoles, users and
anonymous audiences, following parent/child language inheritance.
"""

__version__ = "1.0.0"
