from __future__ import annotations

UPSTREAM_TIMEOUT_MESSAGE = "Upstream timeout: the model did not answer in time. Please try again."


class RelayError(Exception):
    """Base error for relay failures; carries a caller-safe message and HTTP status."""

    status_code: int = 500

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InvalidRequestError(RelayError):
    """Raised when a required input field is missing or malformed."""

    status_code = 400


class PayloadTooLargeError(RelayError):
    status_code = 413


class ConfigurationError(RelayError):
    """Raised when the upstream credential is not configured."""


class UpstreamError(RelayError):
    """Raised when the provider fails or returns an empty completion."""


class UpstreamTimeoutError(UpstreamError):
    """Raised when the bounded wait for the provider elapses."""

    def __init__(self, message: str = UPSTREAM_TIMEOUT_MESSAGE):
        super().__init__(message)
