"""
Catalog package for the card deck.

It turns a spreadsheet published as CSV into filterable catalog items:
``csv_parser`` scans the document, ``store`` derives and filters the
items, ``presenter`` builds the view models and ``router`` exposes them
under ``/api/catalog``. The store never renders anything and never
touches the network; fetching lives in ``sheet_service``.
"""

from .router import router as catalog_router  # noqa: F401
