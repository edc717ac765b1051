"""
Fetch the published spreadsheet as CSV text.

The sheet is downloaded with a plain ``urllib`` request. Any network
error or non-200 response is logged and raised as ``SourceUnavailable``
so that the caller can keep whatever it loaded before and report that
the data could not be loaded.
"""

from __future__ import annotations

import http.client
import logging
import urllib.error
import urllib.request
from typing import Optional

from ..config import HTTP_TIMEOUT

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


class SourceUnavailable(RuntimeError):
    """The sheet could not be fetched (network error or bad status)."""

    def __init__(self, url: str, reason: str, status: Optional[int] = None) -> None:
        super().__init__(f"Could not fetch {url}: {reason}")
        self.url = url
        self.reason = reason
        self.status = status


def _charset(response) -> str:
    return response.headers.get_content_charset() or "utf-8"


def fetch_sheet_csv(url: str, timeout: float = HTTP_TIMEOUT) -> str:
    """Download ``url`` and return its body as text.

    Parameters
    ----------
    url : str
        Address of a sheet published with ``output=csv``.
    timeout : float
        Seconds before the request is abandoned.

    Returns
    -------
    str
        The decoded CSV document.

    Raises
    ------
    SourceUnavailable
        On any network error, malformed URL or non-200 status.
    """
    try:
        request = urllib.request.Request(
            url,
            headers={
                'User-Agent': (
                    'Mozilla/5.0 (Windows NT 10.0; Win64; x64) '
                    'AppleWebKit/537.36 (KHTML, like Gecko) '
                    'Chrome/115.0 Safari/537.36'
                ),
                'Accept': 'text/csv, text/plain;q=0.9, */*;q=0.1',
            },
        )
        with urllib.request.urlopen(request, timeout=timeout) as response:
            if response.status != 200:
                logger.warning("Sheet request to %s returned status %s", url, response.status)
                raise SourceUnavailable(url, f"status {response.status}", status=response.status)
            return response.read().decode(_charset(response), errors='replace')
    except urllib.error.HTTPError as exc:
        logger.error("Error fetching %s: HTTP %s", url, exc.code)
        raise SourceUnavailable(url, f"HTTP {exc.code}", status=exc.code) from exc
    except (urllib.error.URLError, OSError, http.client.HTTPException) as exc:
        logger.error("Error fetching %s: %s", url, exc)
        raise SourceUnavailable(url, str(exc)) from exc
    except ValueError as exc:
        # urllib rejects URLs without a scheme or host before any I/O.
        logger.error("Invalid sheet URL %r: %s", url, exc)
        raise SourceUnavailable(url, f"invalid URL: {exc}") from exc
