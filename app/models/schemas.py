"""
Pydantic schemas for the Health Literacy Translator API.

Defines request/response models for all API endpoints.
"""

from datetime import datetime
from typing import Any, Dict, Optional, List

from pydantic import BaseModel, Field, ConfigDict

from app.core.readability import ClarityLabel
from app.services.translator import TranslationMode


# =============================================================================
# Translation
# =============================================================================

class TranslateRequest(BaseModel):
    """Note to rewrite with the model backend."""

    text: Optional[str] = Field(default=None, description="Clinical note text")
    audience: Optional[str] = Field(
        default=None,
        description="Audience preset (adult, teen, caregiver, esl)"
    )
    tone: Optional[str] = Field(
        default=None,
        description="Tone preset (warm, direct, coach)"
    )


class TranslateResponse(BaseModel):
    """Plain-language rewrite from the model backend."""

    simple: str = Field(description="Plain-language version of the note")
    actions: List[str] = Field(
        default=[],
        description="Short next-step sentences"
    )


class SimplifyRequest(BaseModel):
    """Note to run through the translation orchestrator."""

    text: str = Field(default="", description="Clinical note text")
    audience: str = Field(default="adult", description="Audience preset key")
    tone: str = Field(default="warm", description="Tone preset key")
    highlight: bool = Field(default=True, description="Mark known plain-language terms")
    use_ai: bool = Field(
        default=False,
        description="Try the remote AI translation before the local rules"
    )


class ReadabilityResponse(BaseModel):
    """Readability metrics for the simplified text."""

    word_count: int = Field(ge=0)
    sentence_count: int = Field(ge=1)
    syllable_count: int = Field(ge=0)
    reading_ease: int = Field(description="Flesch-style score, not clamped")
    read_time_minutes: int = Field(ge=1)
    clarity: ClarityLabel

    model_config = ConfigDict(from_attributes=True)


class SimplifyResponse(BaseModel):
    """Rendered translation with status and readability."""

    mode: TranslationMode = Field(description="Path that produced the result")
    status: str = Field(description="Translation notes shown to the user")
    degraded: bool = Field(default=False, description="AI was requested but the local rules answered")
    notice: Optional[str] = Field(
        default=None,
        description="Degraded-mode notice"
    )
    markup: str = Field(description="HTML-safe result fragment")
    simple: Optional[str] = Field(default=None, description="Plain-language text")
    actions: List[str] = Field(default=[], description="Next-step checklist")
    stats: ReadabilityResponse


class ExportRequest(BaseModel):
    """Translation to export as plain text."""

    simple: str = Field(description="Plain-language text")
    actions: List[str] = Field(default=[], description="Next-step checklist")


# =============================================================================
# Samples
# =============================================================================

class SampleNoteResponse(BaseModel):
    """A built-in sample note."""

    label: str
    text: str

    model_config = ConfigDict(from_attributes=True)


# =============================================================================
# Health & Status
# =============================================================================

class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(default="healthy")
    version: str = Field(description="Application version")
    llm_backend: Dict[str, Any] = Field(
        default={},
        description="Configured model, base URL and whether an API key is set"
    )
    timestamp: datetime = Field(default_factory=datetime.utcnow)

    model_config = ConfigDict(from_attributes=True)


# =============================================================================
# Error Responses
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str = Field(description="Error summary")
    details: Optional[str] = Field(
        default=None,
        description="Upstream error body, when available"
    )
