"""
Text helpers shared by the card, list and detail views.

``strip_markdown`` gives a rough plain-text preview for the back of a
card. ``render_markdown`` turns the full description into HTML through
an injected renderer, which must return sanitized HTML; when no
renderer is configured, or the renderer fails, the description is shown
as escaped plain text instead.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Optional

from ..config import CATEGORY_LABELS, DEFAULT_CATEGORY

logger = logging.getLogger(__name__)

# text -> sanitized HTML
MarkdownRenderer = Callable[[str], str]

_MARKUP_CHARS = re.compile(r"[#*_`~>\[\]]")
# Meant for link targets, but any parenthetical text is dropped too.
_PARENTHESIZED = re.compile(r"\(.*?\)")
_LIST_MARKER = re.compile(r"^\s*-\s+", re.MULTILINE)

_HTML_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#039;"),
)


def strip_markdown(text: Optional[str]) -> str:
    """Return a lossy plain-text approximation of markdown ``text``.

    Markup characters are removed first, then parenthesized spans, then
    list markers at the start of a line. The order matters: removing a
    span can leave a dash at the start of a line, which is then stripped.
    """
    if not text:
        return ""
    text = _MARKUP_CHARS.sub("", text)
    text = _PARENTHESIZED.sub("", text)
    return _LIST_MARKER.sub("", text)


def escape_html(text: Optional[str]) -> str:
    if not text:
        return ""
    for char, entity in _HTML_ESCAPES:
        text = text.replace(char, entity)
    return text


def render_markdown(text: Optional[str], renderer: Optional[MarkdownRenderer] = None) -> str:
    """Render ``text`` to HTML, falling back to escaped plain text.

    Parameters
    ----------
    text : Optional[str]
        Markdown source, typically a record's ``desc`` field.
    renderer : Optional[MarkdownRenderer]
        Callable producing sanitized HTML. ``None`` selects the escaped
        fallback directly.

    Returns
    -------
    str
        HTML safe to embed in a page. Renderer errors are logged and
        never propagated.
    """
    if not text:
        return ""
    if renderer is None:
        return escape_html(text)
    try:
        return renderer(text)
    except Exception:
        logger.exception("Markdown rendering failed, falling back to escaped text")
        return escape_html(text)


def category_label(tag: Optional[str]) -> str:
    """Map a lowercase category tag to its display label."""
    normalized = (tag or DEFAULT_CATEGORY).strip().lower() or DEFAULT_CATEGORY
    return CATEGORY_LABELS.get(normalized) or tag or CATEGORY_LABELS[DEFAULT_CATEGORY]
