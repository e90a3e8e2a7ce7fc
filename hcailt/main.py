"""
HCAILT: FastAPI Application Entry Point

This module initializes the FastAPI application and defines the endpoints:
- /domain-check: Is the text medical?
- /translate: Spanish -> technical English translation
- /plain: Technical English -> plain English simplification
- /qe: Quality estimate (0-100) of the plain-language text
- /health: Health check with provider credential status
- /providers: Provider catalogue for the client's model picker

The workflow endpoints are also mounted under /api, the paths used by the
browser client.

The application uses a lifespan context manager to:
1. Load configuration at startup
2. Configure logging based on settings
3. Report which provider credentials are configured
"""

from contextlib import asynccontextmanager
from collections.abc import Awaitable
import logging
import time

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from hcailt import __version__
from hcailt import tasks
from hcailt.config import Settings, configure_logging, get_settings
from hcailt.dispatcher.handlers import ChatDispatcher, get_dispatcher
from hcailt.errors import HcailtError, RequestValidationFailed
from hcailt.middleware.cors import AllowListCORSMiddleware
from hcailt.registry.providers import (
    DEFAULT_TASK_TEMPERATURES,
    TEMPERATURE_LOCKED_MODELS,
    ProviderName,
    get_provider_registry,
)
from hcailt.schemas.api import (
    DomainCheckRequest,
    DomainCheckResponse,
    ErrorResponse,
    HealthResponse,
    ProviderInfo,
    ProvidersResponse,
    QualityEstimateRequest,
    QualityEstimateResponse,
    SimplifyRequest,
    SimplifyResponse,
    TranslateRequest,
    TranslateResponse,
)

logger = logging.getLogger(__name__)

_start_time: float = 0.0

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def with_options(allow: str) -> str:
    """Append OPTIONS to an Allow header value unless already present."""
    methods = [m.strip() for m in allow.split(",") if m.strip()]
    if "OPTIONS" not in methods:
        methods.append("OPTIONS")
    return ", ".join(methods)


def _configured_providers(settings: Settings) -> dict[str, bool]:
    """Provider name -> whether its credential is set."""
    status = {}
    for provider in get_provider_registry().list_providers():
        secret = getattr(settings, provider.settings_field, None)
        status[provider.name.value] = bool(secret and secret.get_secret_value())
    return status


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler for startup/shutdown events.

    On startup:
    - Loads configuration from environment
    - Configures logging
    - Logs which provider credentials are present

    On shutdown:
    - Logs shutdown message
    """
    settings = get_settings()
    configure_logging(settings)

    logger.info("=" * 60)
    logger.info("HCAILT backend starting up...")
    logger.info("=" * 60)
    logger.info(f"Allowed origins: {', '.join(settings.allowed_origins) or '(none)'}")
    logger.info(f"Google retry: {settings.google_max_attempts} attempts")
    logger.info(f"Debug mode: {'enabled' if settings.debug else 'disabled'}")

    configured = _configured_providers(settings)
    for name, ok in configured.items():
        logger.info(f"{name} API key: {'configured' if ok else 'not configured'}")
    if not any(configured.values()):
        logger.warning("No provider credentials configured; every LLM call will fail")

    global _start_time
    _start_time = time.time()

    logger.info("HCAILT backend ready to accept requests")

    yield  # Application runs here

    logger.info("HCAILT backend shutting down...")


_settings = get_settings()

app = FastAPI(
    title="HCAILT Backend",
    description="LLM gateway for medical translation, simplification and quality estimation",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(AllowListCORSMiddleware, allowed_origins=_settings.allowed_origins)


@app.get("/")
async def root():
    """
    Root endpoint with API information.
    """
    return {
        "name": "HCAILT Backend",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
        "providers": "/providers",
        "endpoints": ["/domain-check", "/translate", "/plain", "/qe"],
    }


@app.get("/health", response_model=HealthResponse, summary="Health check")
async def health_check(settings: Settings = Depends(get_settings)):
    """
    Health check endpoint for monitoring.

    The service is "healthy" when at least one provider credential is
    configured, "degraded" otherwise. No provider is contacted.
    """
    providers = _configured_providers(settings)
    uptime = time.time() - _start_time if _start_time > 0 else 0.0

    return HealthResponse(
        status="healthy" if any(providers.values()) else "degraded",
        version=__version__,
        providers=providers,
        uptime_seconds=uptime,
    )


@app.get("/providers", response_model=ProvidersResponse, summary="Provider catalogue")
async def list_providers(settings: Settings = Depends(get_settings)):
    """
    List supported providers with suggested models and retry policy.

    Credentials are never exposed, only whether each one is configured.
    """
    configured = _configured_providers(settings)

    return ProvidersResponse(
        providers=[
            ProviderInfo(
                name=p.name.value,
                display_name=p.display_name,
                credential_env=p.credential_env,
                configured=configured[p.name.value],
                role_model=p.role_model.value,
                max_attempts=(
                    settings.google_max_attempts
                    if p.name == ProviderName.GOOGLE
                    else p.max_attempts
                ),
                models=p.suggested_models,
            )
            for p in get_provider_registry().list_providers()
        ],
        default_provider=ProviderName.OPENAI.value,
        default_temperatures=DEFAULT_TASK_TEMPERATURES,
        temperature_locked_models=TEMPERATURE_LOCKED_MODELS,
    )


# =============================================================================
# WORKFLOW ENDPOINTS
# =============================================================================

workflow = APIRouter(tags=["workflow"])


async def _run_step(step: str, call: Awaitable):
    """
    Await a workflow step, mapping unexpected failures to 500.

    HcailtError subclasses carry their own status and pass through to the
    exception handler. Anything else (provider SDK errors, network errors)
    becomes a 500 with the error message.
    """
    try:
        return await call
    except HcailtError:
        raise
    except Exception as e:
        logger.exception(f"{step} failed")
        raise HTTPException(status_code=500, detail=str(e) or "Unknown error")


@workflow.post(
    "/domain-check",
    response_model=DomainCheckResponse,
    responses=ERROR_RESPONSES,
    summary="Check whether a text is medical",
)
async def domain_check(
    payload: DomainCheckRequest,
    dispatcher: ChatDispatcher = Depends(get_dispatcher),
):
    return await _run_step("Domain check", tasks.check_domain(dispatcher, payload))


@workflow.post(
    "/translate",
    response_model=TranslateResponse,
    responses=ERROR_RESPONSES,
    summary="Translate a Spanish medical text into English",
)
async def translate(
    payload: TranslateRequest,
    dispatcher: ChatDispatcher = Depends(get_dispatcher),
):
    return await _run_step("Translation", tasks.translate(dispatcher, payload))


@workflow.post(
    "/plain",
    response_model=SimplifyResponse,
    responses=ERROR_RESPONSES,
    summary="Simplify a technical translation into plain English",
)
async def plain(
    payload: SimplifyRequest,
    dispatcher: ChatDispatcher = Depends(get_dispatcher),
):
    return await _run_step("Simplification", tasks.simplify(dispatcher, payload))


@workflow.post(
    "/qe",
    response_model=QualityEstimateResponse,
    responses={**ERROR_RESPONSES, 422: {"model": ErrorResponse}},
    summary="Estimate the quality of a plain-language text",
)
async def quality_estimate(
    payload: QualityEstimateRequest,
    dispatcher: ChatDispatcher = Depends(get_dispatcher),
):
    return await _run_step(
        "Quality estimation", tasks.estimate_quality(dispatcher, payload)
    )


app.include_router(workflow)
app.include_router(workflow, prefix="/api")


# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Handle Pydantic validation errors.

    Returns 400 with every field-level message joined by ", ".
    """
    messages = [error.get("msg", "Invalid value") for error in exc.errors()]
    error = RequestValidationFailed(", ".join(messages) or "Validation failed")
    return JSONResponse(
        status_code=error.status_code,
        content={"error": error.message},
    )


@app.exception_handler(HcailtError)
async def hcailt_exception_handler(request: Request, exc: HcailtError) -> JSONResponse:
    """
    Handle errors raised by this package with their own status code.
    """
    logger.warning(f"{request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """
    Handle HTTP exceptions with the uniform {"error": message} body.

    405 responses keep the route's own Allow header, plus OPTIONS, which
    the CORS middleware answers on every path.
    """
    headers = dict(exc.headers or {})
    if exc.status_code == 405:
        headers["Allow"] = with_options(headers.get("Allow", ""))
        message = "Method not allowed"
    else:
        message = str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": message},
        headers=headers,
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected exceptions.

    Logs the full exception for debugging and returns a generic error
    response to avoid leaking implementation details.
    """
    logger.exception("Unhandled exception")
    return JSONResponse(
        status_code=500,
        content={"error": "An unexpected error occurred"},
    )
