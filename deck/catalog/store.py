"""
In-memory data store for the card deck.

A ``CatalogStore`` owns the items of one successful load. ``load()``
derives the display fields of every record into a fresh tuple and only
then swaps it in, so readers see either the previous set or the new
one, never a mix. Filtering and search are pure reads over that tuple
and always preserve load order.

Category filtering tests exact membership of the selected value in the
item's split category tags (``"ai"`` matches ``"ai, progress"`` but not
``"fair"``). Type and format filtering test substring containment on
the raw field.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Mapping, Optional, Tuple

from ..config import CATEGORY_LABELS, DEFAULT_CATEGORY, UNTITLED
from .schemas import CatalogFilters, CatalogItem, FacetOptions
from .text import category_label, strip_markdown

logger = logging.getLogger(__name__)


class CatalogLoadError(ValueError):
    """Raised when a batch of records cannot be turned into catalog items."""


def _norm(s: Optional[str]) -> str:
    """Normalize a string for case-insensitive comparison.

    Parameters
    ----------
    s : Optional[str]
        The string to normalize.

    Returns
    -------
    str
        The normalized string (lowercased and stripped). An empty string is
        returned when the input is ``None`` or empty.
    """
    return (s or "").strip().lower()


def _tokens(raw: Optional[str]) -> List[str]:
    return [token for token in (_norm(part) for part in (raw or "").split(",")) if token]


def split_categories(raw: Optional[str]) -> List[str]:
    """Split a raw ``category`` cell into lowercase tags.

    ``"AI, progress"`` gives ``['ai', 'progress']``; an empty cell gives
    ``['common']`` so every item carries at least one tag.
    """
    return _tokens(raw) or [DEFAULT_CATEGORY]


def build_item(raw: Mapping[str, Optional[str]]) -> CatalogItem:
    """Derive a ``CatalogItem`` from one parsed record.

    ``None`` values count as empty strings. Anything that is not a
    mapping of strings raises ``TypeError`` or ``AttributeError``.
    """
    record = {str(key): ("" if value is None else value.strip()) for key, value in raw.items()}
    return CatalogItem(
        record=record,
        categories=tuple(split_categories(record.get("category"))),
        display_title=record.get("title") or UNTITLED,
        description_preview=strip_markdown(record.get("desc")),
    )


def _contains(value: str, needle: str) -> bool:
    return needle == "" or needle.lower() in value.lower()


def matches_filters(item: CatalogItem, filters: CatalogFilters) -> bool:
    """Return True when ``item`` satisfies every active facet of ``filters``."""
    if not _contains(item.type, filters.type):
        return False
    if not _contains(item.format, filters.format):
        return False
    if filters.category != "" and filters.category.lower() not in item.categories:
        return False
    return True


def matches_search(item: CatalogItem, query: Optional[str]) -> bool:
    """Free-text match on the display title or the raw description.

    An empty (or whitespace-only) query matches every item.
    """
    nq = _norm(query)
    if not nq:
        return True
    return nq in item.display_title.lower() or nq in item.desc.lower()


class CatalogStore:
    """Holds the items of the latest load and answers filter queries."""

    def __init__(self) -> None:
        self._items: Tuple[CatalogItem, ...] = ()

    @property
    def items(self) -> Tuple[CatalogItem, ...]:
        return self._items

    def __len__(self) -> int:
        return len(self._items)

    def get(self, index: int) -> Optional[CatalogItem]:
        """Return the item at load position ``index`` or ``None``."""
        items = self._items
        if 0 <= index < len(items):
            return items[index]
        return None

    def load(self, raw_records: Iterable[Mapping[str, Optional[str]]]) -> None:
        """Replace the stored items with ones derived from ``raw_records``.

        Parameters
        ----------
        raw_records : Iterable[Mapping[str, Optional[str]]]
            Records as produced by ``parse_csv``.

        Raises
        ------
        CatalogLoadError
            If any record cannot be derived. The previous items are kept.
        """
        try:
            items = tuple(build_item(raw) for raw in raw_records)
        except (TypeError, AttributeError, ValueError) as exc:
            logger.error("Catalog load rejected, keeping %d previous items: %s", len(self._items), exc)
            raise CatalogLoadError(f"Could not derive catalog items: {exc}") from exc
        self._items = items
        logger.info("Catalog loaded with %d items", len(items))

    @staticmethod
    def is_empty(filters: Optional[CatalogFilters]) -> bool:
        """True when no facet is selected, whatever the query would return."""
        return filters is None or filters.is_empty

    def select(
        self, filters: Optional[CatalogFilters] = None, query: Optional[str] = None
    ) -> List[Tuple[int, CatalogItem]]:
        """Return ``(index, item)`` pairs matching ``filters`` and ``query``.

        The indices are load positions taken from the same snapshot as
        the items, so they stay valid for ``get()`` until the next load.
        """
        active = filters is not None and not filters.is_empty
        return [
            (i, item)
            for i, item in enumerate(self._items)
            if (not active or matches_filters(item, filters)) and matches_search(item, query)
        ]

    def query(self, filters: Optional[CatalogFilters] = None) -> List[CatalogItem]:
        """Return the items matching ``filters`` in load order.

        Parameters
        ----------
        filters : Optional[CatalogFilters]
            Facet values. ``None`` or all-empty values return every item.

        Returns
        -------
        List[CatalogItem]
            The intersection of the active facet predicates.
        """
        items = self._items
        if filters is None or filters.is_empty:
            return list(items)
        return [item for item in items if matches_filters(item, filters)]

    def search(self, query: Optional[str], filters: Optional[CatalogFilters] = None) -> List[CatalogItem]:
        """Free-text search within the result set of ``filters``."""
        return [item for item in self.query(filters) if matches_search(item, query)]

    def facets(self) -> FacetOptions:
        """Distinct values present in the current load, for the dropdowns."""
        types = sorted({token for item in self._items for token in _tokens(item.type)})
        formats = sorted({token for item in self._items for token in _tokens(item.format)})
        tags = sorted({tag for item in self._items for tag in item.categories})
        # Configured categories keep their configured order; unknown tags follow.
        ordered = [tag for tag in CATEGORY_LABELS if tag in tags]
        ordered += [tag for tag in tags if tag not in CATEGORY_LABELS]
        return FacetOptions(
            types=types,
            formats=formats,
            categories={tag: category_label(tag) for tag in ordered},
        )
