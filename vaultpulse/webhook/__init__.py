"""Webhook delivery for VaultPulse."""

from .errors import (
    WebhookError,
    TransportError,
    HttpStatusError,
    NotFoundError,
    ParseError,
)
from .transport import Transport, TransportResponse, RequestsTransport
from .sender import OutboundResult, WebhookSender, get_mime_type

__all__ = [
    "WebhookError",
    "TransportError",
    "HttpStatusError",
    "NotFoundError",
    "ParseError",
    "Transport",
    "TransportResponse",
    "RequestsTransport",
    "OutboundResult",
    "WebhookSender",
    "get_mime_type",
]
