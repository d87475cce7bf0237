"""
Pydantic schemas for the transcript and the API request/response bodies.

These define the shape of data that goes in and out of the API, and the
shape of the transcript the core reasons about.

FLOW OVERVIEW:
==============
1. Client holds a transcript (list[TranscriptEntry]) and two engine keys
2. Client sends StepRequest to /api/step with the engine whose turn it is
3. Orchestrator builds a prompt, calls the backend, returns CanonicalReply
4. Client appends the reply to its transcript and renders it
"""

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# TRANSCRIPT SCHEMAS
# =============================================================================
#
# WHEN USED:
# - TranscriptEntry: every line of the debate, backend-produced or human
# - CanonicalReply: what the orchestrator returns for one backend turn
#
# The transcript order is the only source of turn parity, so entries are
# frozen: once appended, an entry never changes.
#

class TranscriptEntry(BaseModel):
    """One message in the debate transcript."""

    model_config = ConfigDict(frozen=True)

    speaker: str = Field(description="Display label of whoever produced the text")
    text: str = Field(description="Message body (may contain lightweight markup)")


class CanonicalReply(TranscriptEntry):
    """
    The normalized output of a backend turn.

    Identical shape for every backend, so the caller never needs
    backend-specific knowledge to append it to the transcript.

    USED BY: POST /api/step response, TurnOrchestrator.take_turn
    """

    def to_entry(self) -> TranscriptEntry:
        """Plain transcript entry with the same speaker and text."""
        return TranscriptEntry(speaker=self.speaker, text=self.text)


# =============================================================================
# REGISTRY SCHEMAS
# =============================================================================

class ProviderInfo(BaseModel):
    """A registered backend as shown to clients (no credentials, no model)."""
    key: str
    label: str


class ProvidersResponse(BaseModel):
    """
    Response body for GET /api/providers.

    Example:
        {"providers": [{"key": "anthropic", "label": "Claude 3.5 Sonnet"}, ...]}
    """
    providers: list[ProviderInfo]


# =============================================================================
# API REQUEST / ERROR SCHEMAS
# =============================================================================

class StepRequest(BaseModel):
    """
    Request body for the /api/step endpoint.

    USED BY: POST /api/step
    WHEN: Client asks the backend whose turn it is to speak
    TRIGGERS: Prompt Builder → Backend Adapter → CanonicalReply

    `engine` and `topic` are optional at the schema level so a missing value
    is reported as our own 400 payload instead of a validation error list.

    Example:
        POST /api/step
        {"engine": "openai", "topic": "Is a hot dog a sandwich?",
         "history": [{"speaker": "Claude 3.5 Sonnet", "text": "It is."}],
         "extraPrompt": "Keep it under 100 words."}
    """

    model_config = ConfigDict(populate_by_name=True)

    engine: str | None = Field(default=None, description="Backend key whose turn it is")
    topic: str | None = Field(default=None, description="Debate topic")
    history: list[TranscriptEntry] = Field(
        default_factory=list,
        description="Transcript so far, oldest first",
    )
    extra_prompt: str | None = Field(
        default=None,
        alias="extraPrompt",
        description="Optional additional instructions appended to the prompt",
    )


class ErrorResponse(BaseModel):
    """Error payload returned with every non-success status."""
    error: str
