"""
Fake upstreams and settings shared by the tests.

No test here talks to a real backend: every upstream is an httpx.MockTransport
that records the requests it receives, so tests can assert on call counts
and on the exact wire envelope.
"""

import json

import httpx

from debate_relay.config import Settings


class FakeUpstream:
    """
    Callable handler for httpx.MockTransport.

    Either replies with a fixed status + JSON/text body, picks a reply by host
    (`by_host`), or raises `exc` to simulate a transport failure.
    """

    def __init__(
        self,
        status: int = 200,
        json_body=None,
        text: str | None = None,
        exc: Exception | None = None,
        by_host: dict | None = None,
    ):
        self.status = status
        self.json_body = json_body if json_body is not None else {}
        self.text = text
        self.exc = exc
        self.by_host = by_host or {}
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        if request.url.host in self.by_host:
            return httpx.Response(200, json=self.by_host[request.url.host])
        if self.text is not None:
            return httpx.Response(self.status, text=self.text)
        return httpx.Response(self.status, json=self.json_body)

    @property
    def calls(self) -> int:
        return len(self.requests)

    def last_json(self) -> dict:
        return json.loads(self.requests[-1].content)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


def make_settings(**overrides) -> Settings:
    """Settings with every key configured, ignoring .env and the real environment."""
    values = {
        "openai_api_key": "sk-test",
        "anthropic_api_key": "ant-test",
        "gemini_api_key": "gem-test",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


# Canned 2xx bodies in each backend's real response shape
OPENAI_REPLY = {"choices": [{"message": {"role": "assistant", "content": "  From OpenAI.  "}}]}
ANTHROPIC_REPLY = {"content": [{"type": "text", "text": "From Claude."}]}
GEMINI_REPLY = {"candidates": [{"content": {"parts": [{"text": "From "}, {"text": "Gemini."}]}}]}

REPLIES_BY_HOST = {
    "api.openai.com": OPENAI_REPLY,
    "api.anthropic.com": ANTHROPIC_REPLY,
    "generativelanguage.googleapis.com": GEMINI_REPLY,
}
