"""
Shared fixtures for the card deck tests.

``SAMPLE_CSV`` mimics a sheet exported from Google Sheets: CRLF line
endings, quoted cells with embedded commas, quotes and line breaks, a
blank row in the middle and trailing blank lines.
"""

import pytest

from deck.catalog.csv_parser import parse_csv
from deck.catalog.store import CatalogStore
from deck.session import CatalogSession

SAMPLE_CSV = (
    "title,desc,author,type,format,category\r\n"
    '"Peer Review, v2","Uses ""structured"" **feedback**\nacross sessions",Anna,Practice,Online,"ai, progress"\r\n'
    "Ice breakers,Warm-up (10 min) games,,Method,Offline,involvement\r\n"
    "\r\n"
    ",Office hours,Boris,Practice,\"Online, Offline\",\r\n"
    "Fair grading,Rubrics,Clara,Method,Online,Progress\r\n"
    "\r\n"
    "\r\n"
)


@pytest.fixture
def sample_csv():
    return SAMPLE_CSV


@pytest.fixture
def store(sample_csv):
    s = CatalogStore()
    s.load(parse_csv(sample_csv))
    return s


@pytest.fixture
def session(sample_csv):
    """A session whose fetcher serves ``SAMPLE_CSV`` without network access."""
    calls = []

    def fetcher(url):
        calls.append(url)
        return sample_csv

    s = CatalogSession(url="https://example.test/sheet.csv", fetcher=fetcher)
    s.fetch_calls = calls
    return s
