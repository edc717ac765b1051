"""
Configuration constants for the card deck service.

Values live here as plain module constants. Only the application layer
(``deck.main`` / ``deck.session``) reads ``SHEET_URL``; the parser and
the store never consult the environment.
"""

import os

# Spreadsheet published to the web as CSV. ``DECK_SHEET_URL`` overrides it
# so a deployment can point at another sheet without code changes.
SHEET_URL = os.environ.get(
    "DECK_SHEET_URL",
    "https://docs.google.com/spreadsheets/d/e/"
    "2PACX-1vSQGVQ28mEJ6gBvtT_O7N7sXxw61Kmw9AIbGGyhpJAnHRqh9xZ9dWUbk6w3ly_gI2782pv86GiBnLj3"
    "/pub?gid=0&single=true&output=csv",
)

# Seconds before a sheet request is abandoned.
HTTP_TIMEOUT = 10

# Tag given to items whose ``category`` cell is empty.
DEFAULT_CATEGORY = "common"

# Human readable labels for the lowercase category tags used in the sheet.
CATEGORY_LABELS = {
    "involvement": "Активизация вовлечённости",
    "relations": 'Отношения "преподаватель - студенты"',
    "organisational": "Организация учебного процесса",
    "ai": "Искусственный интеллект",
    "progress": "Оценка прогресса",
    DEFAULT_CATEGORY: "Общее",
}

# Fallback literals shown when a record leaves the field empty.
UNTITLED = "Без названия"
UNKNOWN_AUTHOR = "Неизвестен"
DEFAULT_AUTHOR_INITIAL = "A"
