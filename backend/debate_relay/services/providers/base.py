"""
Backend Adapter base — shared contract for every text-generation backend.

WHAT THIS IS:
Each backend (OpenAI, Anthropic, Gemini) speaks its own wire protocol.
An adapter owns exactly one of those protocols: it builds the request
envelope, sends ONE call, and decodes the response into a BackendResult.

CONTRACT (every adapter):
- send(prompt, credentials, model_id) -> BackendResult
- Missing credential → ConfigurationError, before any network call
- Non-2xx response → BackendError carrying the upstream status
- Transport failure → BackendError; timeout → BackendError(timeout=True)
- 2xx with absent fields → text "" (decoded with first_item / as_text)
- No retries, no caching

Adapters share no state with each other. They borrow the app-wide
httpx.AsyncClient, which is owned (and closed) by the caller.
"""

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

import httpx

from debate_relay.errors import BackendError, ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationOptions:
    """Generation and transport knobs applied to every backend call."""

    temperature: float = 0.8
    max_output_tokens: int = 500
    timeout_seconds: float = 60.0


@dataclass(frozen=True)
class BackendResult:
    """Normalized output of one backend call, before a speaker is attached."""

    provider_key: str
    model: str
    text: str


# =============================================================================
# RESPONSE DECODING HELPERS
# =============================================================================
#
# Backends return deeply nested JSON where any level may be missing.
# These helpers make "field absent → empty" explicit at every step.
#

def first_item(value: Any) -> Any:
    """First element of a list, or None when value is not a non-empty list."""
    if isinstance(value, list) and value:
        return value[0]
    return None


def as_text(value: Any) -> str:
    """The value if it is a string, otherwise an empty string."""
    return value if isinstance(value, str) else ""


def get_field(container: Any, name: str) -> Any:
    """container[name] when container is a dict, otherwise None."""
    if isinstance(container, dict):
        return container.get(name)
    return None


class BackendAdapter(ABC):
    """
    Abstract base class for backend adapters.

    Subclasses set the class attributes and implement _call(), which
    performs the single network call and returns the decoded text.
    """

    provider_key: str = ""
    """Registry key this adapter serves (e.g. 'openai')"""

    display_name: str = ""
    """Name used in error messages (e.g. 'OpenAI')"""

    credential_env: str = ""
    """Environment variable that holds the credential"""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        options: Optional[GenerationOptions] = None,
    ):
        self.http_client = http_client
        self.options = options or GenerationOptions()

    async def send(
        self,
        prompt: str,
        credentials: Optional[str],
        model_id: str,
    ) -> BackendResult:
        """
        Send the prompt to the backend and return its normalized reply.

        Args:
            prompt: Full prompt text from the Prompt Builder
            credentials: API key for this backend (None/blank = not configured)
            model_id: Backend model identifier

        Raises:
            ConfigurationError: credential missing (no network call is made)
            BackendError: the call failed
        """
        if not credentials or not credentials.strip():
            raise ConfigurationError(f"Missing {self.credential_env}")

        start_time = time.time()
        text = await self._call(prompt, credentials.strip(), model_id)
        elapsed = time.time() - start_time

        logger.info(
            f"{self.display_name} ({model_id}) replied with {len(text)} chars "
            f"in {elapsed:.2f}s"
        )
        return BackendResult(provider_key=self.provider_key, model=model_id, text=text)

    @abstractmethod
    async def _call(self, prompt: str, api_key: str, model_id: str) -> str:
        """Perform the backend call and return the decoded, trimmed text."""
        pass

    # =========================================================================
    # HTTP HELPERS
    # =========================================================================

    async def _post_json(
        self,
        url: str,
        body: dict,
        headers: Optional[dict] = None,
        params: Optional[dict] = None,
    ) -> dict:
        """
        POST a JSON body and return the decoded JSON response.

        Translates every httpx failure and non-2xx status into BackendError.
        The URL is never logged (Gemini carries its key in the query string).
        """
        try:
            response = await self.http_client.post(
                url,
                json=body,
                headers=headers,
                params=params,
                timeout=self.options.timeout_seconds,
            )
        except httpx.TimeoutException as e:
            raise self._timeout_error() from e
        except httpx.HTTPError as e:
            logger.error(f"{self.display_name} request failed: {type(e).__name__}")
            raise BackendError(
                self.provider_key,
                f"{self.display_name} request failed: {type(e).__name__}",
            ) from e

        if not response.is_success:
            raise self._status_error(response)

        return self._json_body(response)

    def _json_body(self, response: httpx.Response) -> dict:
        """Decode a successful response body; a non-JSON body is a BackendError."""
        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"{self.display_name} returned a non-JSON body")
            raise BackendError(
                self.provider_key,
                f"{self.display_name} error: response body is not JSON",
                http_status=response.status_code,
            ) from e
        return data if isinstance(data, dict) else {}

    def _status_error(self, response: httpx.Response) -> BackendError:
        logger.error(f"{self.display_name} returned HTTP {response.status_code}")
        return BackendError(
            self.provider_key,
            f"{self.display_name} error: {response.status_code} {response.text}",
            http_status=response.status_code,
        )

    def _timeout_error(self) -> BackendError:
        logger.error(
            f"{self.display_name} timed out after {self.options.timeout_seconds}s"
        )
        return BackendError(
            self.provider_key,
            f"{self.display_name} request timed out after "
            f"{self.options.timeout_seconds}s",
            timeout=True,
        )
