"""
API routes for the Health Literacy Translator.

Defines all REST API endpoints for the note translation service.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from app.api.middleware import limiter
from app.config import settings
from app.core.llm_engine import LLMEngine, UpstreamError, get_llm_engine
from app.models.schemas import (
    ErrorResponse,
    ExportRequest,
    HealthResponse,
    ReadabilityResponse,
    SampleNoteResponse,
    SimplifyRequest,
    SimplifyResponse,
    TranslateRequest,
    TranslateResponse,
)
from app.services.composer import EXPORT_FILENAME, to_plain_text
from app.services.samples import SAMPLE_NOTES
from app.services.translator import TranslateOptions, Translator, get_translator
from app.utils.logger import get_logger

logger = get_logger("routes")

# Create router
router = APIRouter()


def error_response(status_code: int, error: str, details: Optional[str] = None) -> JSONResponse:
    """Build a JSON error body in the ``{error, details?}`` shape."""
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, details=details).model_dump(exclude_none=True)
    )


# =============================================================================
# Health Check
# =============================================================================

@router.get(
    "/health",
    response_model=HealthResponse,
    tags=["System"],
    summary="Health check endpoint"
)
async def health_check(engine: LLMEngine = Depends(get_llm_engine)):
    """
    Check if the service is healthy and running.

    Returns health status, version and model backend configuration.
    """
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        llm_backend=engine.get_status()
    )


# =============================================================================
# AI Translation
# =============================================================================

@router.post(
    "/translate",
    response_model=TranslateResponse,
    tags=["Translation"],
    summary="Rewrite a clinical note with the AI model",
    responses={
        400: {"model": ErrorResponse, "description": "Missing text"},
        500: {"model": ErrorResponse, "description": "AI request failed or server error"}
    }
)
@limiter.limit(f"{settings.rate_limit_per_minute}/minute")
async def translate(
    request: Request,
    body: Optional[TranslateRequest] = None,
    engine: LLMEngine = Depends(get_llm_engine)
):
    """
    Rewrite a clinical note into plain language using the model backend.

    The model is asked for JSON with ``simple`` and ``actions``. If it
    answers with plain text instead, that text is returned as ``simple``
    with no actions.
    """
    if body is None or not body.text:
        return error_response(400, "Missing text")

    try:
        rewrite = await engine.rewrite(body.text, body.audience, body.tone)

    except UpstreamError as e:
        logger.error(
            "AI request failed",
            status_code=e.status_code
        )
        return error_response(500, "AI request failed", e.details)

    except Exception as e:
        logger.error("Translation failed", error=str(e))
        return error_response(500, "Server error")

    return TranslateResponse(simple=rewrite.simple, actions=rewrite.actions)


# =============================================================================
# Local / Orchestrated Translation
# =============================================================================

@router.post(
    "/simplify",
    response_model=SimplifyResponse,
    tags=["Translation"],
    summary="Translate a note into a rendered plain-language summary"
)
@limiter.limit(f"{settings.rate_limit_per_minute}/minute")
async def simplify_note(
    request: Request,
    body: SimplifyRequest,
    translator: Translator = Depends(get_translator)
):
    """
    Translate a note with the local rules, or with the AI model when
    ``use_ai`` is set.

    If the AI call fails, the local rules are used instead and the
    response carries a ``notice`` and ``mode: fallback``. An empty note
    returns the placeholder result.
    """
    options = TranslateOptions(
        audience=body.audience,
        tone=body.tone,
        highlight=body.highlight,
        use_ai=body.use_ai
    )
    outcome = await translator.submit_note(body.text, options)

    return SimplifyResponse(
        mode=outcome.mode,
        status=outcome.status,
        degraded=outcome.degraded,
        notice=outcome.notice,
        markup=outcome.markup,
        simple=outcome.result.simple_text if outcome.result else None,
        actions=outcome.result.actions if outcome.result else [],
        stats=ReadabilityResponse.model_validate(outcome.stats)
    )


# =============================================================================
# Export & Samples
# =============================================================================

@router.post(
    "/export",
    response_class=PlainTextResponse,
    tags=["Export"],
    summary="Download a translation as plain text"
)
async def export_summary(body: ExportRequest):
    """Return the plain-text summary as a file download."""
    return PlainTextResponse(
        content=to_plain_text(body.simple, body.actions),
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'}
    )


@router.get(
    "/samples",
    response_model=list[SampleNoteResponse],
    tags=["Samples"],
    summary="List built-in sample notes"
)
async def list_samples():
    """Sample notes for trying the translator."""
    return [SampleNoteResponse.model_validate(sample) for sample in SAMPLE_NOTES]
