"""
Anthropic Messages API adapter.

WIRE CONTRACT:
    POST https://api.anthropic.com/v1/messages
    Headers: x-api-key: {key}, anthropic-version: 2023-06-01
    Body: {"model", "max_tokens", "temperature",
           "messages": [{"role": "user", "content": prompt}]}

RESPONSE SHAPE (content-array):
    {"content": [{"type": "text", "text": "..."}], ...}
    → first content block's text
"""

from debate_relay.services.providers.base import (
    BackendAdapter,
    as_text,
    first_item,
    get_field,
)

ANTHROPIC_MESSAGES_URL = "https://api.anthropic.com/v1/messages"
ANTHROPIC_VERSION = "2023-06-01"


def decode_anthropic_response(data: dict) -> str:
    """Text of the first content block, or "" when any level is absent."""
    block = first_item(get_field(data, "content"))
    return as_text(get_field(block, "text")).strip()


class AnthropicAdapter(BackendAdapter):
    """Claude via the Messages API (custom API-key header auth)."""

    provider_key = "anthropic"
    display_name = "Anthropic"
    credential_env = "ANTHROPIC_API_KEY"

    async def _call(self, prompt: str, api_key: str, model_id: str) -> str:
        data = await self._post_json(
            ANTHROPIC_MESSAGES_URL,
            headers={
                "x-api-key": api_key,
                "anthropic-version": ANTHROPIC_VERSION,
            },
            body={
                "model": model_id,
                "max_tokens": self.options.max_output_tokens,
                "temperature": self.options.temperature,
                "messages": [{"role": "user", "content": prompt}],
            },
        )
        return decode_anthropic_response(data)
