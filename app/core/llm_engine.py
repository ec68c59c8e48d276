"""
Health Literacy Translator - Model Engine

Asks an OpenRouter-compatible chat-completions backend to rewrite a
clinical note as plain language, returned as JSON with ``simple`` and
``actions`` keys.

IMPORTANT: The model output is a surface rewrite. It is not reviewed
for clinical accuracy.
"""

import json
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List

import httpx

from app.config import settings
from app.utils.logger import get_logger

logger = get_logger("llm_engine")


SYSTEM_PROMPT = (
    "You rewrite medical notes into clear, respectful plain language. "
    "Return JSON with keys: simple (string), actions (array of short sentences). "
    "Keep medical meaning intact and avoid adding new facts."
)


class UpstreamError(Exception):
    """Raised when the model backend answers with a non-2xx status."""

    def __init__(self, status_code: int, details: str):
        super().__init__(f"Upstream returned {status_code}")
        self.status_code = status_code
        self.details = details


@dataclass
class RewriteResponse:
    """Normalized model rewrite."""
    simple: str
    actions: List[str] = field(default_factory=list)
    parsed: bool = True


class LLMEngine:
    """
    Client for the chat-completions endpoint.

    One request per rewrite, no retries. Transport errors propagate
    to the caller; non-2xx answers raise UpstreamError.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        site: Optional[str] = None,
        app_title: Optional[str] = None,
        temperature: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.api_key = api_key if api_key is not None else settings.openrouter_api_key
        self.model = model or settings.openrouter_model
        self.base_url = (base_url or settings.openrouter_base_url).rstrip("/")
        self.site = site if site is not None else settings.openrouter_site
        self.app_title = app_title or settings.openrouter_app
        self.temperature = temperature if temperature is not None else settings.llm_temperature
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
            "HTTP-Referer": self.site,
            "X-Title": self.app_title,
        }

    def _build_payload(
        self,
        text: str,
        audience: Optional[str],
        tone: Optional[str]
    ) -> Dict[str, Any]:
        user_prompt = (
            f"Audience: {audience or 'adult'}\n"
            f"Tone: {tone or 'warm'}\n"
            f"Note: {text}"
        )
        return {
            "model": self.model,
            "temperature": self.temperature,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": user_prompt},
            ],
            "response_format": {"type": "json_object"},
        }

    async def rewrite(
        self,
        text: str,
        audience: Optional[str] = None,
        tone: Optional[str] = None
    ) -> RewriteResponse:
        """
        Rewrite a clinical note with the model.

        Args:
            text: Clinical note
            audience: Audience key passed through to the prompt
            tone: Tone key passed through to the prompt

        Returns:
            RewriteResponse with stripped ``simple`` text and ``actions``

        Raises:
            UpstreamError: backend answered with a non-2xx status
            httpx.HTTPError: transport failure
        """
        payload = self._build_payload(text, audience, tone)

        async with httpx.AsyncClient(transport=self._transport) as client:
            response = await client.post(
                f"{self.base_url}/chat/completions",
                headers=self._headers(),
                json=payload
            )

        if not response.is_success:
            logger.warning(
                "Model request failed",
                status_code=response.status_code,
                model=self.model
            )
            raise UpstreamError(response.status_code, response.text)

        data = response.json()
        content = self._message_content(data)
        result = self._parse_content(content)

        logger.info(
            "Model rewrite completed",
            model=self.model,
            parsed=result.parsed,
            actions=len(result.actions)
        )
        return result

    @staticmethod
    def _message_content(data: Any) -> str:
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            content = None
        return content or "{}"

    @staticmethod
    def _parse_content(content: str) -> RewriteResponse:
        """Parse model content, wrapping non-JSON output as the simple text."""
        try:
            parsed = json.loads(content)
        except json.JSONDecodeError:
            return RewriteResponse(simple=content.strip(), actions=[], parsed=False)

        if not isinstance(parsed, dict):
            parsed = {}

        actions = parsed.get("actions")
        return RewriteResponse(
            simple=str(parsed.get("simple") or "").strip(),
            actions=[str(a) for a in actions] if isinstance(actions, list) else []
        )

    def get_status(self) -> Dict[str, Any]:
        """Get engine status information."""
        return {
            "configured": self.is_configured,
            "model": self.model,
            "base_url": self.base_url,
        }


# Module-level singleton
_engine_instance: Optional[LLMEngine] = None


def get_llm_engine() -> LLMEngine:
    """Get or create singleton engine instance."""
    global _engine_instance
    if _engine_instance is None:
        _engine_instance = LLMEngine()
    return _engine_instance
