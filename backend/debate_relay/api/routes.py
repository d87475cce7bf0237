"""
API Routes — The endpoints a debate client talks to.

ENDPOINTS:
- POST /api/step       → One turn: {engine, topic, history, extraPrompt} → {speaker, text}
- GET  /api/providers  → Registered backends as {key, label} pairs

FLOW:
1. Client calls /api/providers to fill its two engine pickers
2. Client keeps the transcript and decides whose turn it is
3. Client calls /api/step with that engine and the full history
4. Client appends the returned {speaker, text} and renders it

The server keeps no session state: the transcript travels with every request.
"""

import logging

from fastapi import APIRouter, Depends, Request

from debate_relay.errors import InvalidInputError
from debate_relay.models.schemas import (
    CanonicalReply,
    ErrorResponse,
    ProvidersResponse,
    StepRequest,
)
from debate_relay.services.debate.orchestrator import TurnOrchestrator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["api"])


def get_orchestrator(request: Request) -> TurnOrchestrator:
    """Dependency: the orchestrator created in the app lifespan."""
    return request.app.state.orchestrator


# =============================================================================
# TURN ENDPOINT
# =============================================================================

@router.post(
    "/step",
    response_model=CanonicalReply,
    responses={400: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def step(
    request: StepRequest,
    orchestrator: TurnOrchestrator = Depends(get_orchestrator),
) -> CanonicalReply:
    """
    Ask one backend for the next turn of the debate.

    Missing engine or topic is rejected before any backend is called.
    Backend failures come back as {"error": ...} with a non-2xx status
    and the client's transcript is left as it was.

    Example:
        POST /api/step
        {"engine": "gemini", "topic": "Is cereal soup?", "history": []}

        Returns {"speaker": "Gemini 1.5 Flash", "text": "..."}
    """
    if not request.engine or not request.topic:
        raise InvalidInputError("Missing engine or topic.")

    logger.info(
        f"Step requested: engine={request.engine}, "
        f"history={len(request.history)} entries"
    )

    return await orchestrator.take_turn(
        request.topic,
        request.history,
        request.engine,
        extra_instructions=request.extra_prompt,
    )


# =============================================================================
# REGISTRY ENDPOINT
# =============================================================================

@router.get("/providers", response_model=ProvidersResponse)
async def list_providers(
    orchestrator: TurnOrchestrator = Depends(get_orchestrator),
) -> ProvidersResponse:
    """
    List every backend a debate can use.

    Example:
        GET /api/providers
        Returns {"providers": [{"key": "anthropic", "label": "Claude 3.5 Sonnet"}, ...]}
    """
    return ProvidersResponse(providers=orchestrator.registry.list_providers())
