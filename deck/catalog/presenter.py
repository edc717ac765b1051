"""
Turn catalog items into the view models served to the front-end.

Every function here is a pure function of its arguments: the store is
only read, and the markdown renderer is passed in by the caller.
"""

from __future__ import annotations

from typing import List, Optional

from ..config import DEFAULT_AUTHOR_INITIAL, UNKNOWN_AUTHOR
from .schemas import (
    CardView,
    CatalogFilters,
    CatalogItem,
    DeckView,
    DetailView,
    ListEntry,
    ListView,
    LoadState,
)
from .store import CatalogStore
from .text import MarkdownRenderer, category_label, escape_html, render_markdown


def category_labels(item: CatalogItem) -> List[str]:
    return [category_label(tag) for tag in item.categories]


def card_view(index: int, item: CatalogItem) -> CardView:
    return CardView(
        index=index,
        title=escape_html(item.display_title),
        category_labels=[escape_html(label) for label in category_labels(item)],
        description_preview=escape_html(item.description_preview),
    )


def list_entry(index: int, item: CatalogItem) -> ListEntry:
    return ListEntry(
        index=index,
        title=escape_html(item.display_title),
        category_labels=[escape_html(label) for label in category_labels(item)],
    )


def detail_view(index: int, item: CatalogItem, renderer: Optional[MarkdownRenderer] = None) -> DetailView:
    """Build the detail modal for ``item``.

    The author initial is the uppercased first character of the author,
    or ``"A"`` when the record names no author.
    """
    author = item.author
    return DetailView(
        index=index,
        title=item.display_title,
        author=author or UNKNOWN_AUTHOR,
        author_initial=(author or DEFAULT_AUTHOR_INITIAL)[0].upper(),
        category_badge=", ".join(category_labels(item)),
        desc_html=render_markdown(item.desc, renderer),
    )


def deck_view(store: CatalogStore, filters: CatalogFilters, state: LoadState = "ready") -> DeckView:
    """Decide what the deck area shows for ``filters``.

    Until a load has succeeded the deck reports ``loading`` or ``failed``.
    With no facet selected the deck stays ``locked`` regardless of how
    many items a query would return; otherwise it is ``empty`` or
    ``results``.
    """
    if state != "ready" and len(store) == 0:
        return DeckView(state="failed" if state == "failed" else "loading", filters=filters)
    if store.is_empty(filters):
        return DeckView(state="locked", filters=filters)

    matches = store.select(filters)
    if not matches:
        return DeckView(state="empty", filters=filters)
    return DeckView(
        state="results",
        filters=filters,
        cards=[card_view(index, item) for index, item in matches],
    )


def list_view(store: CatalogStore, filters: CatalogFilters, query: Optional[str] = None) -> ListView:
    """List entries for the filtered set, narrowed by a free-text query."""
    matches = store.select(filters, query)
    return ListView(
        query=(query or "").strip(),
        total=len(matches),
        items=[list_entry(index, item) for index, item in matches],
    )
