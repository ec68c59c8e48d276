"""
Health Literacy Translator - FastAPI Application

Rewrites clinical shorthand notes into plain-language summaries for
patients, either with local substitution rules or with an AI model.

IMPORTANT: Output is a surface rewrite, not a clinical review.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.api.routes import router
from app.core.llm_engine import get_llm_engine
from app.api.middleware import (
    BodySizeLimitMiddleware,
    RequestLoggingMiddleware,
    ErrorHandlingMiddleware,
    setup_rate_limiting,
    setup_validation_handling
)
from app.utils.logger import get_logger, configure_logging

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown events.
    """
    configure_logging(
        log_level=settings.log_level,
        json_format=not settings.debug
    )

    logger.info(
        "Starting Health Literacy Translator",
        version=settings.app_version,
        debug=settings.debug,
        model=settings.openrouter_model
    )

    if not get_llm_engine().is_configured:
        logger.warning("Missing OPENROUTER_API_KEY; /translate requests will fail upstream")

    yield

    logger.info("Shutting down Health Literacy Translator")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    app = FastAPI(
        title=settings.app_name,
        description="""
## Health Literacy Translator

Rewrites clinical shorthand notes ("Pt w/ HTN and DM2 reports dyspnea")
into plain-language summaries with a next-steps checklist.

### Endpoints

| Endpoint | Method | Description |
|----------|--------|-------------|
| `/translate` | POST | AI rewrite: `{simple, actions}` |
| `/simplify` | POST | Rendered summary (local rules, optional AI) |
| `/export` | POST | Plain-text download |
| `/samples` | GET | Sample notes |
| `/health` | GET | Health check |

Output is a surface rewrite and is not reviewed for clinical accuracy.
        """,
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc" if settings.debug else None,
    )

    # Middleware order matters - last added is outermost

    app.add_middleware(ErrorHandlingMiddleware)

    app.add_middleware(RequestLoggingMiddleware)

    app.add_middleware(BodySizeLimitMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_rate_limiting(app)

    setup_validation_handling(app)

    app.include_router(router)

    return app


# Create app instance
app = create_app()


# Run with: uvicorn app.main:app --reload
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
