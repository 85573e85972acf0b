"""Errors raised while talking to the webhook endpoint."""

from typing import Optional


class WebhookError(Exception):
    """Base class for webhook failures."""


class TransportError(WebhookError):
    """The request failed before any status code was obtained."""


class HttpStatusError(WebhookError):
    """A response was received but its status is outside [200, 300)."""

    def __init__(self, status: int, body: Optional[str] = None):
        super().__init__(f"Unexpected status: {status}")
        self.status = status
        self.body = body


class NotFoundError(WebhookError):
    """The named attachment does not exist in the vault."""

    def __init__(self, name: str):
        super().__init__(f"Audio file not found: {name}")
        self.name = name


class ParseError(WebhookError):
    """The response body could not be parsed as JSON."""
