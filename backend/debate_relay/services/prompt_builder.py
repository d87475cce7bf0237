"""
Prompt Builder — Turns a topic and transcript into one provider-agnostic prompt.

WHAT THIS DOES:
Every backend receives the same plain-text prompt, so the debate reads the
same no matter which two engines are paired.

PROMPT LAYOUT:
    Topic: {topic}
    Conversation so far:          ← only when the transcript is non-empty
    1. {speaker}: {text}
    2. {speaker}: {text}
    Your role: {speaker_label}. Respond thoughtfully to progress the discussion.
    Additional instructions: ...  ← only when extra instructions are non-blank

Pure function: no state, no I/O, identical inputs give an identical string.

USAGE:
    prompt = build_prompt(
        topic="Should cities ban cars downtown?",
        transcript=history,
        speaker_label="Gemini 1.5 Flash",
        extra_instructions="Answer in three sentences.",
    )
"""

from typing import Optional, Sequence

from debate_relay.errors import InvalidInputError
from debate_relay.models.schemas import TranscriptEntry

ROLE_DIRECTIVE = "Your role: {label}. Respond thoughtfully to progress the discussion."


def _format_transcript(transcript: Sequence[TranscriptEntry]) -> str:
    """Render the transcript as a 1-indexed numbered list."""
    return "\n".join(
        f"{i}. {entry.speaker}: {entry.text}"
        for i, entry in enumerate(transcript, 1)
    )


def require_topic(topic: Optional[str]) -> str:
    """Return the topic, or raise InvalidInputError if it is missing or blank."""
    if not topic or not topic.strip():
        raise InvalidInputError("Topic is required.")
    return topic


def build_prompt(
    topic: Optional[str],
    transcript: Optional[Sequence[TranscriptEntry]],
    speaker_label: str,
    extra_instructions: Optional[str] = None,
) -> str:
    """
    Build the prompt for the next turn.

    Args:
        topic: The debate topic (required, must not be blank)
        transcript: Entries so far, oldest first (None or empty is fine)
        speaker_label: Display label of the backend about to speak
        extra_instructions: Optional guidance appended at the end

    Returns:
        The prompt text

    Raises:
        InvalidInputError: if topic is missing or blank
    """
    prompt = f"Topic: {require_topic(topic)}\n"
    if transcript:
        prompt += f"Conversation so far:\n{_format_transcript(transcript)}\n"
    prompt += ROLE_DIRECTIVE.format(label=speaker_label)

    guidance = (extra_instructions or "").strip()
    if guidance:
        prompt += f"\nAdditional instructions: {guidance}"

    return prompt
