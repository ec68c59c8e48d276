"""
Output composer for the Health Literacy Translator.

Turns a simplified note and its action list into the result card
markup shown to patients, using audience and tone presets.
"""

from dataclasses import dataclass, field
from typing import Optional

from jinja2 import Template

from app.core.actions import extract_actions
from app.core.highlighter import escape_html, highlight as highlight_terms
from app.core.substitution import simplify
from app.utils.logger import get_logger

logger = get_logger("composer")


DEFAULT_AUDIENCE = "adult"
DEFAULT_TONE = "warm"

AUDIENCE_PRESETS = {
    "adult": "Here is a clear explanation:",
    "teen": "Here is a simpler, teen-friendly explanation:",
    "caregiver": "Here is a clear explanation for family or caregivers:",
    "esl": "Here is a plain-English explanation (short sentences):",
}

TONE_PRESETS = {
    "warm": "You are not alone. This is common and treatable.",
    "direct": "Key points and next steps:",
    "coach": "Here is what you can do next:",
}

FOLLOW_UP_QUESTIONS = (
    "What should I watch for at home?",
    "When should I come back or call?",
    "What changes can I make this week?",
)

EXPORT_FILENAME = "plain-language-summary.txt"


@dataclass
class TranslationResult:
    """A rendered plain-language translation."""

    simple_text: str
    actions: list[str] = field(default_factory=list)
    markup: str = ""


# Values are escaped before rendering; the template does no escaping.
RESULT_TEMPLATE = Template("""
<div class="result-card">
  <div class="chip">Plain-language version</div>
  <p>{{ intro }}</p>
  <p>{{ simple_html }}</p>
</div>
<div class="result-card">
  <strong>{{ headline }}</strong>
  <ul>{% for action in actions %}<li>{{ action }}.</li>{% endfor %}</ul>
</div>
<div class="result-card">
  <strong>What to ask next</strong>
  <ul>
{%- for question in questions %}
    <li>{{ question }}</li>
{%- endfor %}
  </ul>
</div>
""")


def _lookup_preset(presets: dict, key: Optional[str], default: str, kind: str) -> str:
    if key in presets:
        return presets[key]
    logger.warning("Unknown preset, using default", kind=kind, key=key, default=default)
    return presets[default]


def audience_intro(audience: Optional[str]) -> str:
    return _lookup_preset(AUDIENCE_PRESETS, audience, DEFAULT_AUDIENCE, "audience")


def tone_headline(tone: Optional[str]) -> str:
    return _lookup_preset(TONE_PRESETS, tone, DEFAULT_TONE, "tone")


def compose(
    simple_text: str,
    actions: list[str],
    audience: Optional[str] = DEFAULT_AUDIENCE,
    tone: Optional[str] = DEFAULT_TONE,
    highlight: bool = True
) -> TranslationResult:
    """
    Render a simplified note and its actions as result markup.

    Args:
        simple_text: Plain-language text
        actions: Next-step sentences, rendered as a checklist
        audience: Audience preset key (unknown keys fall back to "adult")
        tone: Tone preset key (unknown keys fall back to "warm")
        highlight: Whether to mark known plain-language terms

    Returns:
        TranslationResult with HTML-safe markup
    """
    simple_html = highlight_terms(simple_text) if highlight else escape_html(simple_text)

    markup = RESULT_TEMPLATE.render(
        intro=audience_intro(audience),
        simple_html=simple_html,
        headline=tone_headline(tone),
        actions=[escape_html(action) for action in actions],
        questions=FOLLOW_UP_QUESTIONS,
    )

    return TranslationResult(
        simple_text=simple_text,
        actions=list(actions),
        markup=markup
    )


def build_output(
    text: str,
    audience: Optional[str] = DEFAULT_AUDIENCE,
    tone: Optional[str] = DEFAULT_TONE,
    highlight: bool = True
) -> TranslationResult:
    """Run the local pipeline: simplify, extract actions, compose."""
    simple_text = simplify(text)
    actions = extract_actions(simple_text)
    return compose(simple_text, actions, audience, tone, highlight)


def to_plain_text(simple_text: str, actions: list[str]) -> str:
    """Plain-text export of a translation (copy/download form)."""
    steps = "\n".join(f"- {action}" for action in actions)
    return f"{simple_text}\n\nNext steps:\n{steps}"
