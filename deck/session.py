# deck/session.py
"""
Application session: one catalog store plus the state of its last load.

A ``CatalogSession`` is created once per application and handed to the
routes through FastAPI's dependency injection. Loads are serialized: a
``refresh()`` that starts while another is still running is refused
instead of queued.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from .catalog.csv_parser import parse_csv
from .catalog.schemas import LoadState, LoadStatus
from .catalog.sheet_service import SourceUnavailable, fetch_sheet_csv
from .catalog.store import CatalogLoadError, CatalogStore
from .catalog.text import MarkdownRenderer
from .config import SHEET_URL

logger = logging.getLogger(__name__)

Fetcher = Callable[[str], str]


class LoadInProgress(RuntimeError):
    """Another load is already running for this session."""


class CatalogSession:
    def __init__(
        self,
        url: str = SHEET_URL,
        fetcher: Fetcher = fetch_sheet_csv,
        renderer: Optional[MarkdownRenderer] = None,
    ) -> None:
        self.url = url
        self.fetcher = fetcher
        self.renderer = renderer
        self.store = CatalogStore()
        self.state: LoadState = "pending"
        self.error: Optional[str] = None
        self._load_lock = threading.Lock()

    def status(self) -> LoadStatus:
        return LoadStatus(state=self.state, count=len(self.store), error=self.error)

    def load_text(self, text: str) -> LoadStatus:
        """Parse ``text`` and replace the store contents with it."""
        try:
            self.store.load(parse_csv(text))
        except CatalogLoadError as exc:
            self.state = "failed"
            self.error = str(exc)
            raise
        self.state = "ready"
        self.error = None
        return self.status()

    def refresh(self) -> LoadStatus:
        """Fetch the sheet and reload the store.

        Raises
        ------
        LoadInProgress
            If another refresh has not finished yet.
        SourceUnavailable
            If the sheet could not be fetched. The store keeps its
            previous items and the state becomes ``failed``.
        CatalogLoadError
            If the fetched records could not be derived.

        Any other error from the fetcher or the parser also leaves the
        state ``failed`` before it propagates, so the session never stays
        in ``loading``.
        """
        if not self._load_lock.acquire(blocking=False):
            raise LoadInProgress("A catalog load is already running")
        try:
            self.state = "loading"
            try:
                text = self.fetcher(self.url)
            except SourceUnavailable as exc:
                self.state = "failed"
                self.error = str(exc)
                raise
            except Exception as exc:
                logger.exception("Unexpected error fetching %s", self.url)
                self.state = "failed"
                self.error = str(exc) or type(exc).__name__
                raise
            try:
                return self.load_text(text)
            except CatalogLoadError:
                raise
            except Exception as exc:
                logger.exception("Unexpected error loading %s", self.url)
                self.state = "failed"
                self.error = str(exc) or type(exc).__name__
                raise
        finally:
            self._load_lock.release()
