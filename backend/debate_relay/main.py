import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from debate_relay.api.routes import router
from debate_relay.config import get_settings
from debate_relay.errors import DebateRelayError
from debate_relay.services.debate.orchestrator import TurnOrchestrator
from debate_relay.services.providers.registry import build_default_registry

logger = logging.getLogger(__name__)


# =============================================================================
# LIFESPAN: Startup and Shutdown Logic
# =============================================================================
#
# Startup: one shared HTTP client for every backend call, the provider
# registry on top of it, and the turn orchestrator that uses the registry.
# Shutdown: close the HTTP client so pooled connections are released.
#
# Missing API keys are NOT a startup error: the server runs, and only turns
# sent to an unconfigured backend fail (ConfigurationError → 500).
#
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    settings = get_settings()

    # === STARTUP ===
    http_client = httpx.AsyncClient(timeout=settings.request_timeout_seconds)
    registry = build_default_registry(http_client, settings)
    app.state.orchestrator = TurnOrchestrator(registry, settings)

    configured = [key for key in registry.keys() if settings.credentials_for(key)]
    logger.info(f"Providers with credentials: {configured or 'none'}")

    yield

    # === SHUTDOWN ===
    await http_client.aclose()


app = FastAPI(
    title="Debate Relay",
    description="Turn-based debate between two text-generation backends",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


# =============================================================================
# ERROR HANDLERS
# =============================================================================
#
# Every failure is returned as {"error": "..."} so clients need one code path.
# Status comes from the exception class (see errors.py).
#

@app.exception_handler(DebateRelayError)
async def debate_relay_error_handler(request: Request, exc: DebateRelayError):
    if exc.status_code >= 500:
        logger.error(f"{request.url.path} failed: {exc.message}")
    else:
        logger.warning(f"{request.url.path} rejected: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"{request.url.path} rejected: invalid request body")
    return JSONResponse(status_code=400, content={"error": "Invalid request body."})


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # httpx logs full request URLs at INFO, and the Gemini key rides in the query string
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)


def run() -> None:
    """Serve the API with uvicorn using host/port from settings."""
    import uvicorn

    settings = get_settings()
    configure_logging(settings.log_level)
    uvicorn.run(app, host=settings.host, port=settings.port)
