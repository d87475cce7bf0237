"""
Turn Orchestrator — Produces one transcript entry from one backend.

WHAT THIS DOES:
Given the topic, the transcript so far, and the backend whose turn it is,
builds the prompt, calls that backend, and returns a CanonicalReply.

HOW IT WORKS:
1. Check the topic (InvalidInputError)
2. Look up the backend in the registry (UnknownBackendError) and build
   the prompt from topic + transcript
3. Resolve credential and model from configuration
4. Call the adapter (ConfigurationError / BackendError)
5. Wrap the text with the speaker label → CanonicalReply

The orchestrator never touches the transcript. Appending the reply is the
caller's job, so a failed turn leaves the caller's state exactly as it was
and the same turn can simply be requested again.

Callers must not run two turns of the same session concurrently.

USAGE:
    orchestrator = TurnOrchestrator(registry, settings)
    reply = await orchestrator.take_turn(
        topic="Is remote work here to stay?",
        transcript=history,
        backend_identity="anthropic",
    )
    history.append(reply.to_entry())
"""

import logging
import time
from typing import Optional, Sequence

from debate_relay.config import Settings
from debate_relay.models.schemas import CanonicalReply, TranscriptEntry
from debate_relay.services.prompt_builder import build_prompt, require_topic
from debate_relay.services.providers.registry import ProviderRegistry

logger = logging.getLogger(__name__)


class TurnOrchestrator:
    """
    Runs single debate turns against registered backends.

    Holds only read-only collaborators (registry, settings), so one instance
    can serve any number of independent sessions.
    """

    def __init__(self, registry: ProviderRegistry, settings: Settings):
        self.registry = registry
        self.settings = settings

    def label_for(self, backend_identity: str) -> str:
        """Registered display label of a backend."""
        return self.registry.get(backend_identity).label

    async def take_turn(
        self,
        topic: Optional[str],
        transcript: Optional[Sequence[TranscriptEntry]],
        backend_identity: Optional[str],
        speaker_label: Optional[str] = None,
        extra_instructions: Optional[str] = None,
    ) -> CanonicalReply:
        """
        Produce the next reply from the given backend.

        Args:
            topic: Debate topic
            transcript: Entries so far (not modified)
            backend_identity: Registry key of the backend that speaks
            speaker_label: Label to speak as (defaults to the registry label)
            extra_instructions: Optional guidance appended to the prompt

        Returns:
            CanonicalReply with the speaker label and the backend's text

        Raises:
            InvalidInputError, UnknownBackendError, ConfigurationError, BackendError
        """
        # A bad topic is reported ahead of a bad backend key
        require_topic(topic)

        provider = self.registry.get(backend_identity)
        label = speaker_label or provider.label

        prompt = build_prompt(topic, transcript, label, extra_instructions)

        credentials = self.settings.credentials_for(provider.key)
        model_id = self.settings.model_for(provider.key, provider.default_model)

        logger.info(
            f"Turn {len(transcript or [])}: dispatching to {provider.key} "
            f"({model_id}), prompt {len(prompt)} chars"
        )
        start_time = time.time()

        result = await provider.adapter.send(prompt, credentials, model_id)

        logger.info(
            f"Turn {len(transcript or [])}: {provider.key} done in "
            f"{time.time() - start_time:.2f}s"
        )
        return CanonicalReply(speaker=label, text=result.text)
