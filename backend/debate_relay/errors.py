"""
Error taxonomy for the debate relay.

Every failure a turn can produce is one of these. The API layer maps them
to HTTP statuses (see main.py); the CLI prints them and lets the user retry.

HIERARCHY:
    DebateRelayError
    ├── InvalidInputError     caller sent bad input (topic missing, blank message)
    ├── UnknownBackendError   backend key is not registered
    ├── ConfigurationError    backend is registered but has no credential
    ├── BackendError          upstream call failed (non-2xx, transport, timeout)
    └── SessionStateError     session method called in the wrong state
"""

from typing import Optional


class DebateRelayError(Exception):
    """Base class for all debate relay errors."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(DebateRelayError):
    """Required caller input is missing or blank."""

    status_code = 400


class UnknownBackendError(DebateRelayError):
    """The requested backend identity is not in the registry."""

    status_code = 400

    def __init__(self, provider_key: str):
        super().__init__(f"Unknown provider: {provider_key}")
        self.provider_key = provider_key


class ConfigurationError(DebateRelayError):
    """A registered backend has no credential configured."""

    status_code = 500


class BackendError(DebateRelayError):
    """
    A backend call failed.

    Carries the provider key, and the upstream HTTP status when there was one.
    `timeout` is set when the call exceeded the configured time bound.
    """

    status_code = 502

    def __init__(
        self,
        provider_key: str,
        message: str,
        http_status: Optional[int] = None,
        timeout: bool = False,
    ):
        super().__init__(message)
        self.provider_key = provider_key
        self.http_status = http_status
        self.timeout = timeout
        if timeout:
            self.status_code = 504


class SessionStateError(DebateRelayError):
    """A session operation is not allowed in the session's current state."""

    status_code = 409
