"""
Route definitions for the card deck API.

Endpoints under /api/catalog:
- GET  /status        : state of the last load and item count
- POST /reload        : fetch the sheet again and replace the catalog
- GET  /deck          : cards for the selected type/format/category
- GET  /list          : list view of the same selection, with text search
- GET  /items/{index} : detail view of one item
- GET  /facets        : values available for each filter dropdown
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from ..session import CatalogSession, LoadInProgress
from .presenter import deck_view, detail_view, list_view
from .schemas import CatalogFilters, DeckView, DetailView, FacetOptions, ListView, LoadStatus
from .sheet_service import SourceUnavailable
from .store import CatalogLoadError

router = APIRouter(prefix="/api/catalog", tags=["catalog"])


def get_session(request: Request) -> CatalogSession:
    return request.app.state.session


def get_filters(
    type: str = Query(default="", description="Filter by type"),
    format: str = Query(default="", description="Filter by format"),
    category: str = Query(default="", description="Filter by category tag"),
) -> CatalogFilters:
    return CatalogFilters(type=type, format=format, category=category)


@router.get("/status", response_model=LoadStatus)
def get_status(session: CatalogSession = Depends(get_session)) -> LoadStatus:
    return session.status()


@router.post("/reload", response_model=LoadStatus)
def reload_catalog(session: CatalogSession = Depends(get_session)) -> LoadStatus:
    """Fetch the sheet again and replace the catalog.

    The previous items stay in place when the fetch or the load fails.
    """
    try:
        return session.refresh()
    except LoadInProgress as e:
        raise HTTPException(status_code=409, detail=str(e))
    except (SourceUnavailable, CatalogLoadError) as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.get("/deck", response_model=DeckView)
def get_deck(
    filters: CatalogFilters = Depends(get_filters),
    session: CatalogSession = Depends(get_session),
) -> DeckView:
    return deck_view(session.store, filters, session.state)


@router.get("/list", response_model=ListView)
def get_list(
    q: str = Query(default="", description="Text search (title/description)"),
    filters: CatalogFilters = Depends(get_filters),
    session: CatalogSession = Depends(get_session),
) -> ListView:
    return list_view(session.store, filters, q)


@router.get("/items/{index}", response_model=DetailView)
def get_item(index: int, session: CatalogSession = Depends(get_session)) -> DetailView:
    item = session.store.get(index)
    if item is None:
        raise HTTPException(status_code=404, detail="Item not found")
    return detail_view(index, item, session.renderer)


@router.get("/facets", response_model=FacetOptions)
def get_facets(session: CatalogSession = Depends(get_session)) -> FacetOptions:
    return session.store.facets()
