"""
Providers — One adapter per text-generation backend, plus the registry.

COMPONENTS:
- BackendAdapter: shared contract (credential check, error mapping, decoding helpers)
- OpenAIAdapter / AnthropicAdapter / GeminiAdapter: one wire protocol each
- ProviderRegistry: key → label, default model, adapter

USAGE:
    from debate_relay.services.providers import build_default_registry

    registry = build_default_registry(http_client, settings)
    result = await registry.get("openai").adapter.send(prompt, api_key, "gpt-4o-mini")
"""

from debate_relay.services.providers.base import (
    BackendAdapter,
    BackendResult,
    GenerationOptions,
)
from debate_relay.services.providers.openai_adapter import OpenAIAdapter
from debate_relay.services.providers.anthropic_adapter import AnthropicAdapter
from debate_relay.services.providers.gemini_adapter import GeminiAdapter
from debate_relay.services.providers.registry import (
    ProviderRegistry,
    RegisteredProvider,
    build_default_registry,
    generation_options,
)

__all__ = [
    "BackendAdapter",
    "BackendResult",
    "GenerationOptions",
    "OpenAIAdapter",
    "AnthropicAdapter",
    "GeminiAdapter",
    "ProviderRegistry",
    "RegisteredProvider",
    "build_default_registry",
    "generation_options",
]
