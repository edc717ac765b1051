# deck/main.py
import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from .catalog import catalog_router
from .catalog.sheet_service import SourceUnavailable
from .catalog.store import CatalogLoadError
from .session import CatalogSession

logger = logging.getLogger(__name__)


def create_app(session: Optional[CatalogSession] = None, load_on_startup: bool = True) -> FastAPI:
    session = session or CatalogSession()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if load_on_startup:
            try:
                await asyncio.to_thread(session.refresh)
            except (SourceUnavailable, CatalogLoadError) as e:
                # The deck reports "failed" until a reload succeeds.
                logger.error("Initial catalog load failed: %s", e)
            except Exception:
                # Still serve the app; the session already reports "failed".
                logger.exception("Initial catalog load failed unexpectedly")
        yield

    app = FastAPI(
        title="Card deck catalogue",
        description=(
            "Serves a spreadsheet published as CSV as a filterable deck of "
            "cards: type/format/category filters, list view with search and "
            "a detail view per card."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.session = session
    app.include_router(catalog_router)

    @app.get("/")
    def health_check():
        status = session.status()
        return {"status": "ok", "catalog": status.state, "count": status.count}

    return app


app = create_app()
