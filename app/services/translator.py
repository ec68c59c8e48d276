"""
Translation orchestrator for the Health Literacy Translator.

Chooses between the local substitution pipeline and a remote AI
translation, falls back to the local pipeline when the remote call
fails, and normalizes both paths into one outcome.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Protocol

import httpx

from app.config import settings
from app.core.actions import extract_actions
from app.core.readability import ReadabilityStats, compute_stats
from app.services.composer import (
    DEFAULT_AUDIENCE,
    DEFAULT_TONE,
    TranslationResult,
    build_output,
    compose,
)
from app.utils.logger import get_logger

logger = get_logger("translator")


PLACEHOLDER_MARKUP = '<div class="result-card">Paste a doctor\'s note to translate.</div>'
PLACEHOLDER_STATUS = "Paste a note to see translation notes."
FALLBACK_NOTICE = "AI service unavailable. Using standard translation."


class TranslationMode(str, Enum):
    """Which path produced an outcome."""
    PLACEHOLDER = "placeholder"
    LOCAL = "local"
    REMOTE = "remote"
    FALLBACK = "fallback"


@dataclass
class TranslateOptions:
    """Per-request translation options."""
    audience: str = DEFAULT_AUDIENCE
    tone: str = DEFAULT_TONE
    highlight: bool = True
    use_ai: bool = False


@dataclass
class RemoteTranslation:
    """Body of a successful remote translation."""
    simple: str
    actions: List[str] = field(default_factory=list)


@dataclass
class TranslationOutcome:
    """Everything a caller needs to render one translation."""

    mode: TranslationMode
    stats: ReadabilityStats
    status: str
    markup: str
    result: Optional[TranslationResult] = None
    notice: Optional[str] = None

    @property
    def degraded(self) -> bool:
        return self.mode == TranslationMode.FALLBACK


class RemoteTranslationError(Exception):
    """Remote translation failed (transport, status or body)."""


class RemoteTranslator(Protocol):
    async def fetch_remote_translation(
        self,
        text: str,
        options: TranslateOptions
    ) -> RemoteTranslation:
        ...


class HttpRemoteTranslator:
    """
    Remote translator that POSTs ``{text, audience, tone}`` to a
    /translate endpoint.

    No explicit timeout is set; the httpx client default applies.
    """

    def __init__(
        self,
        endpoint: str,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.endpoint = endpoint
        self._transport = transport

    async def fetch_remote_translation(
        self,
        text: str,
        options: TranslateOptions
    ) -> RemoteTranslation:
        payload = {"text": text, "audience": options.audience, "tone": options.tone}

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.post(self.endpoint, json=payload)
        except httpx.HTTPError as e:
            raise RemoteTranslationError(f"Transport error: {e}") from e

        if not response.is_success:
            raise RemoteTranslationError(f"Remote returned {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise RemoteTranslationError("Remote body is not JSON") from e

        return self._normalize(data)

    @staticmethod
    def _normalize(data: Any) -> RemoteTranslation:
        if data is None:
            raise RemoteTranslationError("Remote body is null")
        # Arrays and scalars carry no fields; the note text is used instead
        if not isinstance(data, dict):
            data = {}

        simple = data.get("simple") or data.get("output") or ""
        actions = data.get("actions")
        return RemoteTranslation(
            simple=str(simple),
            actions=[str(a) for a in actions] if isinstance(actions, list) else []
        )


class Translator:
    """
    Orchestrates one translation per submitted note.

    Flow:
    - empty note: placeholder, no remote call
    - use_ai off (or no remote client): local pipeline
    - use_ai on: remote call, local fallback on any failure

    ``last_outcome`` holds whichever request finished last; overlapping
    requests are not fenced.
    """

    def __init__(self, remote: Optional[RemoteTranslator] = None):
        self.remote = remote
        self.last_outcome: Optional[TranslationOutcome] = None

    async def submit_note(
        self,
        text: str,
        options: Optional[TranslateOptions] = None
    ) -> TranslationOutcome:
        """
        Translate a note into a plain-language outcome.

        Args:
            text: Raw clinical note
            options: Audience, tone, highlight and remote settings

        Returns:
            TranslationOutcome
        """
        options = options or TranslateOptions()
        note = text.strip()

        if not note:
            outcome = TranslationOutcome(
                mode=TranslationMode.PLACEHOLDER,
                stats=compute_stats(text),
                status=PLACEHOLDER_STATUS,
                markup=PLACEHOLDER_MARKUP
            )
        elif options.use_ai and self.remote is not None:
            outcome = await self._translate_remote(note, options)
        else:
            outcome = self._translate_local(note, options)

        self.last_outcome = outcome

        logger.info(
            "Note translated",
            mode=outcome.mode.value,
            reading_ease=outcome.stats.reading_ease,
            actions=len(outcome.result.actions) if outcome.result else 0
        )
        return outcome

    def _translate_local(self, note: str, options: TranslateOptions) -> TranslationOutcome:
        result = build_output(note, options.audience, options.tone, options.highlight)
        stats = compute_stats(result.simple_text)
        return TranslationOutcome(
            mode=TranslationMode.LOCAL,
            stats=stats,
            status=(
                f"Clarity score: {stats.reading_ease} (estimated). "
                f"Actions found: {len(result.actions)}."
            ),
            markup=result.markup,
            result=result
        )

    async def _translate_remote(self, note: str, options: TranslateOptions) -> TranslationOutcome:
        try:
            remote = await self.remote.fetch_remote_translation(note, options)
        except RemoteTranslationError as e:
            logger.warning("Remote translation failed, using local fallback", error=str(e))
            return self._fallback(note, options)
        except Exception as e:
            logger.warning(
                "Remote translator raised, using local fallback",
                error=str(e),
                error_type=type(e).__name__
            )
            return self._fallback(note, options)

        actions = remote.actions or extract_actions(remote.simple)
        result = compose(remote.simple or note, actions, options.audience, options.tone, options.highlight)
        stats = compute_stats(result.simple_text)

        return TranslationOutcome(
            mode=TranslationMode.REMOTE,
            stats=stats,
            status=(
                f"AI mode: clarity score {stats.reading_ease}. "
                f"Actions found: {len(result.actions)}."
            ),
            markup=result.markup,
            result=result
        )

    def _fallback(self, note: str, options: TranslateOptions) -> TranslationOutcome:
        result = build_output(note, options.audience, options.tone, options.highlight)
        stats = compute_stats(result.simple_text)
        return TranslationOutcome(
            mode=TranslationMode.FALLBACK,
            stats=stats,
            status=(
                f"Standard mode: clarity score {stats.reading_ease}. "
                f"Actions found: {len(result.actions)}."
            ),
            markup=f'<div class="result-card">{FALLBACK_NOTICE}</div>' + result.markup,
            result=result,
            notice=FALLBACK_NOTICE
        )


# Module-level singleton
_translator_instance: Optional[Translator] = None


def get_translator() -> Translator:
    """Get or create the translator wired to the configured AI endpoint."""
    global _translator_instance
    if _translator_instance is None:
        remote = HttpRemoteTranslator(settings.ai_endpoint) if settings.ai_endpoint else None
        _translator_instance = Translator(remote=remote)
    return _translator_instance
