"""HTTP transport used by the webhook sender."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Tuple

import requests

from .errors import TransportError

logger = logging.getLogger(__name__)

# (file name, content, mime type)
FileField = Tuple[str, bytes, str]


@dataclass(frozen=True)
class TransportResponse:
    """Raw outcome of a request that reached the server."""

    status: int
    text: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class Transport(ABC):
    """Abstract POST transport. Raises TransportError when no status is obtained."""

    @abstractmethod
    def post_json(
        self,
        url: str,
        headers: Mapping[str, str],
        payload: Dict[str, Any],
        timeout: float,
    ) -> TransportResponse:
        """POST a JSON body."""
        pass

    @abstractmethod
    def post_multipart(
        self,
        url: str,
        headers: Mapping[str, str],
        fields: Dict[str, str],
        files: Dict[str, FileField],
        timeout: float,
    ) -> TransportResponse:
        """POST a multipart/form-data body."""
        pass

    def close(self) -> None:
        """Release any pooled connections."""
        pass


class RequestsTransport(Transport):
    """Transport backed by a requests.Session."""

    def __init__(self, user_agent: str = "vaultpulse/1.0"):
        self.session = requests.Session()
        self.session.headers.update({"User-Agent": user_agent})

    def post_json(self, url, headers, payload, timeout):
        try:
            response = self.session.post(
                url,
                json=payload,
                headers=dict(headers),
                timeout=timeout,
            )
        except requests.RequestException as e:
            raise TransportError(str(e)) from e

        logger.debug(f"POST {url} -> {response.status_code}")
        return TransportResponse(status=response.status_code, text=response.text)

    def post_multipart(self, url, headers, fields, files, timeout):
        # requests sets the multipart Content-Type (with boundary) itself
        try:
            response = self.session.post(
                url,
                data=fields,
                files=files,
                headers=dict(headers),
                timeout=timeout,
            )
        except requests.RequestException as e:
            raise TransportError(str(e)) from e

        logger.debug(f"POST (multipart) {url} -> {response.status_code}")
        return TransportResponse(status=response.status_code, text=response.text)

    def close(self) -> None:
        self.session.close()
