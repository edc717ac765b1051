"""
Pydantic schema definitions for the catalog module.

``CatalogItem`` wraps one parsed spreadsheet row together with the
fields derived from it when the store is loaded. ``CatalogFilters``
carries the three dropdown values. The remaining models are the view
shapes returned by the API so that a front-end only has to place
ready-made strings into its templates.
"""

from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing_extensions import Literal

LoadState = Literal["pending", "loading", "ready", "failed"]
DeckState = Literal["loading", "failed", "locked", "empty", "results"]


class CatalogItem(BaseModel):
    """A normalized, display-ready record.

    ``record`` holds every column of the source row exactly as parsed
    (keyed by header) behind a read-only mapping view. ``categories`` is
    a tuple that always contains at least one tag. Neither can be changed
    after construction.
    ``description_preview`` is only meant for compact previews; the
    detail view renders the full ``desc`` field.
    """

    model_config = ConfigDict(frozen=True)

    record: Mapping[str, str]
    categories: Tuple[str, ...]
    display_title: str
    description_preview: str = ""

    @field_validator("record", mode="after")
    @classmethod
    def freeze_record(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType(dict(value))

    def get(self, name: str, default: str = "") -> str:
        return self.record.get(name) or default

    @property
    def title(self) -> str:
        return self.get("title")

    @property
    def desc(self) -> str:
        return self.get("desc")

    @property
    def author(self) -> str:
        return self.get("author")

    @property
    def type(self) -> str:
        return self.get("type")

    @property
    def format(self) -> str:
        return self.get("format")

    @property
    def category(self) -> str:
        return self.get("category")


class CatalogFilters(BaseModel):
    """Facet filter values. An empty string leaves a facet unconstrained."""

    type: str = ""
    format: str = ""
    category: str = ""

    @property
    def is_empty(self) -> bool:
        return self.type == "" and self.format == "" and self.category == ""


class FacetOptions(BaseModel):
    """Distinct values available for each facet dropdown."""

    types: List[str] = Field(default_factory=list)
    formats: List[str] = Field(default_factory=list)
    categories: Dict[str, str] = Field(default_factory=dict)


class CardView(BaseModel):
    """Front and back of one card. Text fields are already HTML-escaped."""

    index: int
    title: str
    category_labels: List[str] = Field(default_factory=list)
    description_preview: str = ""


class ListEntry(BaseModel):
    index: int
    title: str
    category_labels: List[str] = Field(default_factory=list)


class DetailView(BaseModel):
    """Content of the detail modal.

    ``title``, ``author`` and ``author_initial`` are plain text meant for
    text nodes; ``desc_html`` is sanitized HTML.
    """

    index: int
    title: str
    author: str
    author_initial: str
    category_badge: str
    desc_html: str = ""


class DeckView(BaseModel):
    state: DeckState
    filters: CatalogFilters = Field(default_factory=CatalogFilters)
    cards: List[CardView] = Field(default_factory=list)


class ListView(BaseModel):
    query: str = ""
    total: int
    items: List[ListEntry] = Field(default_factory=list)


class LoadStatus(BaseModel):
    state: LoadState
    count: int = 0
    error: Optional[str] = None
