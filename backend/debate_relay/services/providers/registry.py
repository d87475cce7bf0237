"""
Provider Registry — Static table of the backends a debate can use.

WHAT THIS DOES:
Maps a backend key ("openai", "anthropic", "gemini") to its display label,
default model id, and adapter instance. Selection by an unknown key raises
UnknownBackendError; it never falls through to some other backend.

USAGE:
    registry = build_default_registry(http_client, settings)
    provider = registry.get("gemini")
    provider.label        # "Gemini 1.5 Flash"
    registry.list_providers()  # [ProviderInfo(key="anthropic", ...), ...]
"""

from dataclasses import dataclass
from typing import Iterable, Optional

import httpx

from debate_relay.config import Settings
from debate_relay.errors import UnknownBackendError
from debate_relay.models.schemas import ProviderInfo
from debate_relay.services.providers.anthropic_adapter import AnthropicAdapter
from debate_relay.services.providers.base import BackendAdapter, GenerationOptions
from debate_relay.services.providers.gemini_adapter import GeminiAdapter
from debate_relay.services.providers.openai_adapter import OpenAIAdapter


@dataclass(frozen=True)
class RegisteredProvider:
    """A backend entry in the registry."""

    key: str
    """Backend identity (e.g. 'openai')"""

    label: str
    """Display label, also used as the transcript speaker name"""

    default_model: str
    """Model id used when configuration does not override it"""

    adapter: BackendAdapter
    """Adapter that speaks this backend's wire protocol"""


class ProviderRegistry:
    """Read-only lookup of registered backends, in registration order."""

    def __init__(self, providers: Iterable[RegisteredProvider]):
        self._providers: dict[str, RegisteredProvider] = {}
        for provider in providers:
            self._providers[provider.key] = provider

    def get(self, key: Optional[str]) -> RegisteredProvider:
        """Look up a backend; raises UnknownBackendError for unregistered keys."""
        provider = self._providers.get(key) if key else None
        if provider is None:
            raise UnknownBackendError(str(key))
        return provider

    def list_providers(self) -> list[ProviderInfo]:
        """All registered backends as {key, label} pairs."""
        return [
            ProviderInfo(key=p.key, label=p.label)
            for p in self._providers.values()
        ]

    def __contains__(self, key: object) -> bool:
        return key in self._providers

    def keys(self) -> list[str]:
        return list(self._providers)


def generation_options(settings: Settings) -> GenerationOptions:
    """Adapter options from configuration."""
    return GenerationOptions(
        temperature=settings.temperature,
        max_output_tokens=settings.max_output_tokens,
        timeout_seconds=settings.request_timeout_seconds,
    )


def build_default_registry(
    http_client: httpx.AsyncClient,
    settings: Settings,
) -> ProviderRegistry:
    """The three stock backends, sharing one HTTP client."""
    options = generation_options(settings)
    return ProviderRegistry([
        RegisteredProvider(
            key="anthropic",
            label="Claude 3.5 Sonnet",
            default_model="claude-3-5-sonnet-latest",
            adapter=AnthropicAdapter(http_client, options),
        ),
        RegisteredProvider(
            key="gemini",
            label="Gemini 1.5 Flash",
            default_model="gemini-1.5-flash",
            adapter=GeminiAdapter(http_client, options),
        ),
        RegisteredProvider(
            key="openai",
            label="ChatGPT (OpenAI gpt-4o-mini)",
            default_model="gpt-4o-mini",
            adapter=OpenAIAdapter(http_client, options, base_url=settings.openai_base_url),
        ),
    ])
