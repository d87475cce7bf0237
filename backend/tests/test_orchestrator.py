"""
Tests for the turn orchestrator, end to end against faked upstreams.

Run with: pytest tests/test_orchestrator.py -v
"""

import pytest

from debate_relay.errors import (
    BackendError,
    ConfigurationError,
    InvalidInputError,
    UnknownBackendError,
)
from debate_relay.models.schemas import CanonicalReply, TranscriptEntry
from debate_relay.services.debate import SessionController, TurnOrchestrator
from debate_relay.services.providers import build_default_registry
from fakes import REPLIES_BY_HOST, FakeUpstream, make_settings


@pytest.mark.asyncio
async def test_two_backends_alternate(settings):
    """A speaks on the empty transcript, the caller appends, then B is next."""
    upstream = FakeUpstream(by_host=REPLIES_BY_HOST)
    session = SessionController("openai", "anthropic")
    transcript: list[TranscriptEntry] = []

    async with upstream.client() as http_client:
        orchestrator = TurnOrchestrator(build_default_registry(http_client, settings), settings)

        speaker = session.next_speaker(transcript)
        assert speaker == "openai"

        reply = await orchestrator.take_turn("Pineapple on pizza?", transcript, speaker)
        assert isinstance(reply, CanonicalReply)
        assert reply.speaker == "ChatGPT (OpenAI gpt-4o-mini)"
        assert reply.text == "From OpenAI."

        transcript.append(reply.to_entry())
        assert session.next_speaker(transcript) == "anthropic"

        second = await orchestrator.take_turn(
            "Pineapple on pizza?", transcript, session.next_speaker(transcript)
        )

    assert second.speaker == "Claude 3.5 Sonnet"
    assert second.text == "From Claude."

    # The second prompt carries the first reply as history
    prompt = upstream.last_json()["messages"][0]["content"]
    assert "Conversation so far:\n1. ChatGPT (OpenAI gpt-4o-mini): From OpenAI." in prompt
    assert "Your role: Claude 3.5 Sonnet." in prompt


@pytest.mark.asyncio
async def test_backend_can_debate_itself(settings):
    upstream = FakeUpstream(by_host=REPLIES_BY_HOST)
    session = SessionController("gemini", "gemini")
    session.start()

    async with upstream.client() as http_client:
        orchestrator = TurnOrchestrator(build_default_registry(http_client, settings), settings)
        await session.run_turn(orchestrator, "Is light a wave?")
        await session.run_turn(orchestrator, "Is light a wave?")

    assert [e.speaker for e in session.transcript] == ["Gemini 1.5 Flash", "Gemini 1.5 Flash"]
    assert upstream.calls == 2


@pytest.mark.asyncio
async def test_unknown_backend_leaves_transcript_untouched(settings):
    upstream = FakeUpstream(by_host=REPLIES_BY_HOST)
    transcript = [TranscriptEntry(speaker="User", text="hello")]
    before = list(transcript)

    async with upstream.client() as http_client:
        orchestrator = TurnOrchestrator(build_default_registry(http_client, settings), settings)
        with pytest.raises(UnknownBackendError):
            await orchestrator.take_turn("Topic", transcript, "mistral")

    assert transcript == before
    assert upstream.calls == 0


@pytest.mark.asyncio
async def test_missing_topic_fails_before_backend(settings):
    upstream = FakeUpstream(by_host=REPLIES_BY_HOST)

    async with upstream.client() as http_client:
        orchestrator = TurnOrchestrator(build_default_registry(http_client, settings), settings)
        with pytest.raises(InvalidInputError):
            await orchestrator.take_turn("", [], "openai")

    assert upstream.calls == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("speaker_label", [None, "X"])
async def test_missing_topic_is_reported_before_unknown_backend(settings, speaker_label):
    upstream = FakeUpstream(by_host=REPLIES_BY_HOST)

    async with upstream.client() as http_client:
        orchestrator = TurnOrchestrator(build_default_registry(http_client, settings), settings)
        with pytest.raises(InvalidInputError):
            await orchestrator.take_turn("", [], "mistral", speaker_label=speaker_label)

    assert upstream.calls == 0


@pytest.mark.asyncio
async def test_unconfigured_backend_raises_configuration_error():
    settings = make_settings(gemini_api_key="")
    upstream = FakeUpstream(by_host=REPLIES_BY_HOST)

    async with upstream.client() as http_client:
        orchestrator = TurnOrchestrator(build_default_registry(http_client, settings), settings)
        with pytest.raises(ConfigurationError):
            await orchestrator.take_turn("Topic", [], "gemini")

    assert upstream.calls == 0


@pytest.mark.asyncio
async def test_backend_failure_propagates_and_transcript_untouched(settings):
    upstream = FakeUpstream(status=500, json_body={"error": "overloaded"})
    transcript = [TranscriptEntry(speaker="A", text="first")]

    async with upstream.client() as http_client:
        orchestrator = TurnOrchestrator(build_default_registry(http_client, settings), settings)
        with pytest.raises(BackendError) as exc_info:
            await orchestrator.take_turn("Topic", transcript, "anthropic")

    assert exc_info.value.http_status == 500
    assert transcript == [TranscriptEntry(speaker="A", text="first")]


@pytest.mark.asyncio
async def test_model_and_speaker_overrides():
    settings = make_settings(anthropic_model="claude-custom")
    upstream = FakeUpstream(by_host=REPLIES_BY_HOST)

    async with upstream.client() as http_client:
        orchestrator = TurnOrchestrator(build_default_registry(http_client, settings), settings)
        reply = await orchestrator.take_turn(
            "Topic", [], "anthropic", speaker_label="Prosecution", extra_instructions="Be terse."
        )

    body = upstream.last_json()
    assert body["model"] == "claude-custom"
    assert "Your role: Prosecution." in body["messages"][0]["content"]
    assert body["messages"][0]["content"].endswith("Additional instructions: Be terse.")
    assert reply.speaker == "Prosecution"


@pytest.mark.asyncio
async def test_empty_upstream_text_is_a_valid_reply(settings):
    upstream = FakeUpstream(json_body={"candidates": []})

    async with upstream.client() as http_client:
        orchestrator = TurnOrchestrator(build_default_registry(http_client, settings), settings)
        reply = await orchestrator.take_turn("Topic", [], "gemini")

    assert reply == CanonicalReply(speaker="Gemini 1.5 Flash", text="")
