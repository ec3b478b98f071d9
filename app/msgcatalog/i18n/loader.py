"""Catalog loading: turn a batch of raw sources into linked catalogs.

The loader orders sources so parents are built before their children, then
builds each catalog against the catalogs already built in the same batch.
A bad source is logged and dropped; the rest of the batch still loads.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from msgcatalog.i18n.errors import (
    CatalogError,
    CyclicParentError,
    InvalidSourceError,
    MissingParentError,
)
from msgcatalog.i18n.models import Catalog, RawSource
from msgcatalog.logging import get_module_logger

logger = get_module_logger()


@dataclass
class LoadResult:
    """Outcome of one loader run.

    Attributes:
        catalogs: Successfully built catalogs keyed by code.
        failures: One error per dropped source.
    """

    catalogs: Dict[str, Catalog] = field(default_factory=dict)
    failures: List[CatalogError] = field(default_factory=list)

    @property
    def failed_codes(self) -> List[Optional[str]]:
        return [failure.code for failure in self.failures]


def _sort_key(source: RawSource) -> Tuple[bool, str]:
    # Sources without a parent first, then by code
    return (source.parent_code is not None, source.code or "")


def _join_lines(lines: List[Any]) -> Optional[str]:
    if not lines:
        return None
    return "\n".join("" if line is None else str(line) for line in lines)


class CatalogLoader:
    """Builds parent-ordered catalogs from raw sources.

    Usage:
        loader = CatalogLoader()
        result = loader.load(sources)
        en_gb = result.catalogs["en_gb"]
    """

    def order_sources(
        self, sources: Iterable[RawSource]
    ) -> Tuple[List[RawSource], List[RawSource]]:
        """Order sources so every parent precedes its children.

        Sources are first sorted with parentless sources ahead of the rest and
        ties broken by code. Repeated passes then place each source once its
        parent is placed. A source whose parent is not part of the batch is
        placed immediately; the build step reports it.

        Args:
            sources: Sources with a derivable code.

        Returns:
            Tuple of (ordered sources, sources whose parent chain is cyclic).
        """
        pending = sorted(sources, key=_sort_key)
        batch_codes = {source.code for source in pending}
        placed: set = set()
        ordered: List[RawSource] = []

        while pending:
            remaining = []
            for source in pending:
                parent_code = source.parent_code
                if (
                    parent_code is None
                    or parent_code not in batch_codes
                    or parent_code in placed
                ):
                    ordered.append(source)
                    placed.add(source.code)
                else:
                    remaining.append(source)

            if len(remaining) == len(pending):
                break
            pending = remaining

        return ordered, pending

    def load(self, sources: Iterable[RawSource]) -> LoadResult:
        """Build catalogs from a batch of raw sources.

        Args:
            sources: Raw sources from a source provider.

        Returns:
            LoadResult with the built catalogs and the dropped sources' errors.
        """
        result = LoadResult()
        candidates: Dict[str, RawSource] = {}

        for source in sources:
            if not source.code:
                self._record_failure(
                    result,
                    InvalidSourceError(
                        "Source has no derivable catalog code",
                        origin=source.origin,
                    ),
                )
                continue

            # Later sources replace earlier ones before any parent is linked
            if source.code in candidates:
                logger.warning(
                    "duplicate_catalog_code",
                    code=source.code,
                    replaced=candidates[source.code].origin,
                    origin=source.origin,
                )
            candidates[source.code] = source

        ordered, cyclic = self.order_sources(candidates.values())

        for source in cyclic:
            self._record_failure(
                result,
                CyclicParentError(source.code, source.parent_code, source.origin),
            )

        for source in ordered:
            try:
                catalog = self._build(source, result.catalogs)
            except (CatalogError, TypeError, ValueError) as e:
                if not isinstance(e, CatalogError):
                    e = InvalidSourceError(str(e), code=source.code, origin=source.origin)
                self._record_failure(result, e)
                continue

            result.catalogs[catalog.code] = catalog

        logger.info(
            "catalog_batch_loaded",
            catalog_count=len(result.catalogs),
            failure_count=len(result.failures),
        )
        return result

    def _build(self, source: RawSource, built: Dict[str, Catalog]) -> Catalog:
        """Build and seal one catalog.

        Args:
            source: Source to build.
            built: Catalogs already built in this batch.

        Returns:
            Sealed Catalog.

        Raises:
            MissingParentError: If the declared parent was not built.
            InvalidSourceError: If the entries cannot be iterated.
        """
        parent = None
        if source.parent_code is not None:
            parent = built.get(source.parent_code)
            if parent is None:
                raise MissingParentError(
                    source.code, source.parent_code, source.origin
                )

        catalog = Catalog(source.code, parent=parent)
        for key, raw_value in source.iter_entries():
            if not isinstance(key, str) or not key:
                continue

            if isinstance(raw_value, (list, tuple)):
                message = _join_lines(list(raw_value))
                if message is not None:
                    catalog.set_entry(key, message)
            elif isinstance(raw_value, str):
                catalog.set_entry(key, raw_value)
            elif raw_value is None:
                catalog.set_entry(key, key)
            # Nested sections and non-text scalars are not messages

        catalog.seal()
        logger.debug(
            "catalog_built",
            code=catalog.code,
            parent=source.parent_code,
            entry_count=len(catalog),
        )
        return catalog

    @staticmethod
    def _record_failure(result: LoadResult, error: CatalogError) -> None:
        logger.warning(
            "catalog_source_skipped",
            code=error.code,
            origin=error.origin,
            error_type=type(error).__name__,
            error=str(error),
        )
        result.failures.append(error)
