"""
OpenAI Chat Completions adapter.

WIRE CONTRACT:
    POST https://api.openai.com/v1/chat/completions
    Headers: Authorization: Bearer {key}
    Body: {"model", "temperature",
           "messages": [{"role": "system", ...}, {"role": "user", "content": prompt}]}

RESPONSE SHAPE (choices-array):
    {"choices": [{"message": {"role": "assistant", "content": "..."}}], ...}
    → first choice's message content

HOW IT WORKS:
The official SDK builds the envelope and classifies failures. We ask for the
raw HTTP response so the body is decoded with the same explicit
"absent → empty" rules as the other adapters. SDK retries are disabled:
a failed call ends the turn.
"""

import logging
from typing import Optional

import httpx
import openai
from openai import AsyncOpenAI

from debate_relay.errors import BackendError
from debate_relay.services.providers.base import (
    BackendAdapter,
    GenerationOptions,
    as_text,
    first_item,
    get_field,
)

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are an insightful debater."


def decode_openai_response(data: dict) -> str:
    """Content of the first choice's message, or "" when any level is absent."""
    choice = first_item(get_field(data, "choices"))
    message = get_field(choice, "message")
    return as_text(get_field(message, "content")).strip()


class OpenAIAdapter(BackendAdapter):
    """ChatGPT via Chat Completions (bearer token auth)."""

    provider_key = "openai"
    display_name = "OpenAI"
    credential_env = "OPENAI_API_KEY"

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        options: Optional[GenerationOptions] = None,
        base_url: Optional[str] = None,
    ):
        super().__init__(http_client, options)
        self.base_url = base_url

    def _client(self, api_key: str) -> AsyncOpenAI:
        # The connection pool lives in the shared httpx client
        return AsyncOpenAI(
            api_key=api_key,
            base_url=self.base_url,
            http_client=self.http_client,
            max_retries=0,
            timeout=self.options.timeout_seconds,
        )

    async def _call(self, prompt: str, api_key: str, model_id: str) -> str:
        client = self._client(api_key)

        try:
            raw = await client.chat.completions.with_raw_response.create(
                model=model_id,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                temperature=self.options.temperature,
            )
        except openai.APITimeoutError as e:
            raise self._timeout_error() from e
        except openai.APIStatusError as e:
            raise self._status_error(e.response) from e
        except openai.APIError as e:
            logger.error(f"{self.display_name} request failed: {type(e).__name__}")
            raise BackendError(
                self.provider_key,
                f"{self.display_name} request failed: {type(e).__name__}",
            ) from e

        return decode_openai_response(self._json_body(raw.http_response))
