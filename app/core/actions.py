"""
Next-step extraction for plain-language summaries.

Pulls the sentences that ask the patient to do something (start a
medicine, schedule a visit, return if symptoms worsen) so they can be
shown as a checklist.
"""

import re

from app.core.readability import split_sentences

ACTION_KEYWORDS = (
    "recommend",
    "start",
    "schedule",
    "call",
    "follow",
    "return",
    "take",
    "rest",
    "encourage",
)

FALLBACK_ACTION = "Ask your care team to explain any parts you do not understand."

# Substring match: "follow" also hits "follow-up appointment"
_ACTION_PATTERN = re.compile("|".join(ACTION_KEYWORDS), re.IGNORECASE)


def extract_actions(text: str) -> list[str]:
    """
    Return the sentences of text that contain an action keyword.

    Never returns an empty list; when nothing matches, a single prompt
    to ask the care team is returned instead.
    """
    actions = [s for s in split_sentences(text) if _ACTION_PATTERN.search(s)]
    return actions or [FALLBACK_ACTION]
