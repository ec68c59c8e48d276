"""
Readability scoring for plain-language summaries.

Estimates syllables with a vowel-run heuristic and derives a
Flesch-style reading-ease score, an estimated read time and a
coarse clarity label. Everything here is pure and deterministic.
"""

import math
import re
from dataclasses import dataclass
from enum import Enum


class ClarityLabel(str, Enum):
    """Coarse clarity buckets derived from reading ease."""
    EASY = "Easy"
    STANDARD = "Standard"
    COMPLEX = "Complex"


@dataclass
class ReadabilityStats:
    """Readability metrics for a block of text."""

    word_count: int
    sentence_count: int
    syllable_count: int
    reading_ease: int
    read_time_minutes: int
    clarity: ClarityLabel


WORDS_PER_MINUTE = 200
EASY_THRESHOLD = 80
COMPLEX_THRESHOLD = 50

_WORD_PATTERN = re.compile(r"\b[\w']+\b", re.ASCII)
_SENTENCE_SPLIT = re.compile(r"[.!?]")
_SILENT_SUFFIX = re.compile(r"(?:[^laeiouy]es|ed|[^laeiouy]e)$")
_LEADING_Y = re.compile(r"^y")
_VOWEL_RUN = re.compile(r"[aeiouy]{1,2}")


def split_sentences(text: str) -> list[str]:
    """Split on terminal punctuation and drop empty fragments."""
    return [s.strip() for s in _SENTENCE_SPLIT.split(text) if s.strip()]


def count_syllables(word: str) -> int:
    """
    Estimate the syllable count of a single word.

    Drops a silent trailing -e/-es/-ed and a leading "y", then counts
    runs of one or two vowels. Words with no vowel run count as one.
    """
    cleaned = _SILENT_SUFFIX.sub("", word.lower(), count=1)
    cleaned = _LEADING_Y.sub("", cleaned, count=1)
    return len(_VOWEL_RUN.findall(cleaned)) or 1


def round_half_up(value: float) -> int:
    # round() would use banker's rounding
    return math.floor(value + 0.5)


def clarity_for(reading_ease: int) -> ClarityLabel:
    if reading_ease >= EASY_THRESHOLD:
        return ClarityLabel.EASY
    if reading_ease <= COMPLEX_THRESHOLD:
        return ClarityLabel.COMPLEX
    return ClarityLabel.STANDARD


def compute_stats(text: str) -> ReadabilityStats:
    """
    Compute readability metrics for text.

    The reading-ease score is not clamped and can fall below 0 or
    above 100 for very short or very dense text.

    Args:
        text: Plain text to score

    Returns:
        ReadabilityStats for the text
    """
    words = _WORD_PATTERN.findall(text.strip())
    word_count = len(words)
    sentence_count = max(len(split_sentences(text)), 1)
    syllable_count = sum(count_syllables(word) for word in words)

    reading_ease = round_half_up(
        206.835
        - 1.015 * (word_count / sentence_count)
        - 84.6 * (syllable_count / max(word_count, 1))
    )
    read_time = max(1, math.ceil(word_count / WORDS_PER_MINUTE))

    return ReadabilityStats(
        word_count=word_count,
        sentence_count=sentence_count,
        syllable_count=syllable_count,
        reading_ease=reading_ease,
        read_time_minutes=read_time,
        clarity=clarity_for(reading_ease),
    )
