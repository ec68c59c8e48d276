"""
HTML escaping and term highlighting for summary markup.
"""

import re
from typing import Iterable

HIGHLIGHT_TERMS: tuple[str, ...] = (
    "high blood pressure",
    "type 2 diabetes",
    "shortness of breath",
    "heart ultrasound",
    "blood pressure medicine",
    "follow-up appointment",
    "blood tests",
    "emergency department",
    "emergency room",
    "blood pressure",
    "heart rate",
)

_HTML_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#39;"),
)


def escape_html(text: str) -> str:
    """Escape the five HTML-special characters."""
    # & must go first so later entities are not re-escaped
    for char, entity in _HTML_ESCAPES:
        text = text.replace(char, entity)
    return text


def _term_pattern(term: str) -> re.Pattern:
    return re.compile(rf"\b{re.escape(term)}\b", re.IGNORECASE | re.ASCII)


def highlight(text: str, terms: Iterable[str] = HIGHLIGHT_TERMS) -> str:
    """
    Escape text and wrap known plain-language terms in <mark> tags.

    Terms are applied in order and matches keep their original casing.
    A shorter term that also occurs inside a longer, already-marked term
    is marked again, e.g. "blood pressure" inside "high blood pressure"
    yields nested tags.

    Args:
        text: Plain text to render
        terms: Phrases to emphasize (defaults to HIGHLIGHT_TERMS)

    Returns:
        HTML-safe string with <mark> emphasis
    """
    html = escape_html(text)
    for term in terms:
        html = _term_pattern(term).sub(lambda m: f"<mark>{m.group(0)}</mark>", html)
    return html
