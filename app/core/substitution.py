"""
Shorthand-to-plain-language term substitution.

Rewrites clinical abbreviations ("HTN", "DM2", "f/u", ...) into the
phrases a patient would use. Rules are applied in order, each one to
the output of the rule before it, so an expansion can itself be
re-matched by a later rule. "ED" is the standard example: it expands
to "emergency department", and the later "er" rule then fires inside
"emergency". The table is kept as-is; callers that need different
behavior pass their own rules.
"""

import re
from dataclasses import dataclass
from typing import Iterable

from app.utils.logger import get_logger

logger = get_logger("substitution")


@dataclass(frozen=True)
class ReplacementRule:
    """A case-insensitive pattern and the literal text that replaces it."""

    pattern: re.Pattern
    replacement: str

    @classmethod
    def compile(cls, pattern: str, replacement: str) -> "ReplacementRule":
        return cls(re.compile(pattern, re.IGNORECASE | re.ASCII), replacement)

    def apply(self, text: str) -> str:
        # Callable replacement keeps the text literal (no group expansion)
        return self.pattern.sub(lambda _: self.replacement, text)


DEFAULT_RULES: tuple[ReplacementRule, ...] = tuple(
    ReplacementRule.compile(pattern, replacement)
    for pattern, replacement in [
        (r"(pt\b|patient\b)", "the patient"),
        (r"(hx|history) of", "history of"),
        (r"htn", "high blood pressure"),
        (r"dm2|t2dm", "type 2 diabetes"),
        (r"dyspnea", "shortness of breath"),
        (r"sob", "shortness of breath"),
        (r"echo", "heart ultrasound"),
        (r"acei", "blood pressure medicine"),
        (r"f/u|follow[- ]?up", "follow-up appointment"),
        (r"prn", "as needed"),
        (r"bid", "twice a day"),
        (r"qd", "once a day"),
        (r"qhs", "at bedtime"),
        (r"dx", "diagnosis"),
        (r"rx", "prescription"),
        (r"labs?", "blood tests"),
        (r"stat", "right away"),
        (r"w/", "with"),
        (r"c/", "with"),
        (r"r/o", "rule out"),
        (r"neg", "negative"),
        (r"pos", "positive"),
        (r"ed", "emergency department"),
        (r"er", "emergency room"),
        (r"bp", "blood pressure"),
        (r"hr", "heart rate"),
    ]
)

_WHITESPACE = re.compile(r"\s+")


def normalize_whitespace(text: str) -> str:
    """Collapse whitespace runs to single spaces and trim."""
    return _WHITESPACE.sub(" ", text).strip()


def simplify(
    text: str,
    rules: Iterable[ReplacementRule] = DEFAULT_RULES
) -> str:
    """
    Rewrite shorthand in text using an ordered rule list.

    Args:
        text: Raw clinical note
        rules: Rules to apply, in order (defaults to DEFAULT_RULES)

    Returns:
        Whitespace-normalized plain-language text
    """
    result = text
    for rule in rules:
        result = rule.apply(result)

    result = normalize_whitespace(result)

    logger.debug(
        "Text simplified",
        original_length=len(text),
        simplified_length=len(result)
    )
    return result
