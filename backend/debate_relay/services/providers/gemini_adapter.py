"""
Google Gemini generateContent adapter.

WIRE CONTRACT:
    POST https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent?key={key}
    Body: {"contents": [{"parts": [{"text": prompt}]}],
           "generationConfig": {"temperature", "maxOutputTokens"}}

RESPONSE SHAPE (candidates-array):
    {"candidates": [{"content": {"parts": [{"text": "..."}, ...]}}], ...}
    → concatenation of every text part of the first candidate

The key travels in the query string, so URLs built here must never be logged.
"""

from debate_relay.services.providers.base import (
    BackendAdapter,
    as_text,
    first_item,
    get_field,
)

GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta/models"


def decode_gemini_response(data: dict) -> str:
    """Joined text parts of the first candidate; parts without text add ""."""
    candidate = first_item(get_field(data, "candidates"))
    parts = get_field(get_field(candidate, "content"), "parts")
    if not isinstance(parts, list):
        return ""
    return "".join(as_text(get_field(part, "text")) for part in parts).strip()


class GeminiAdapter(BackendAdapter):
    """Gemini via generateContent (query-string key auth)."""

    provider_key = "gemini"
    display_name = "Gemini"
    credential_env = "GEMINI_API_KEY"

    async def _call(self, prompt: str, api_key: str, model_id: str) -> str:
        data = await self._post_json(
            f"{GEMINI_API_BASE}/{model_id}:generateContent",
            params={"key": api_key},
            body={
                "contents": [{"parts": [{"text": prompt}]}],
                "generationConfig": {
                    "temperature": self.options.temperature,
                    "maxOutputTokens": self.options.max_output_tokens,
                },
            },
        )
        return decode_gemini_response(data)
