# Transcript and API schemas
from debate_relay.models.schemas import (
    TranscriptEntry,
    CanonicalReply,
    ProviderInfo,
    ProvidersResponse,
    StepRequest,
    ErrorResponse,
)

__all__ = [
    "TranscriptEntry",
    "CanonicalReply",
    "ProviderInfo",
    "ProvidersResponse",
    "StepRequest",
    "ErrorResponse",
]
