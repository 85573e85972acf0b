"""Webhook notifications for detected voice notes."""

import json
import logging
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from threading import Lock
from typing import Any, Dict, Optional, Tuple

from ..config import WebhookConfig
from ..store.base import DocumentStore
from .errors import HttpStatusError, NotFoundError, ParseError
from .transport import RequestsTransport, Transport, TransportResponse

logger = logging.getLogger(__name__)

# Header carrying the credential
AUTH_HEADER = "obsidian_vault"

DEFAULT_MIME_TYPE = "audio/mpeg"

MIME_TYPES = {
    "m4a": "audio/mp4",
    "mp3": "audio/mpeg",
    "wav": "audio/wav",
    "webm": "audio/webm",
    "ogg": "audio/ogg",
    "aac": "audio/aac",
    "flac": "audio/flac",
}


def get_mime_type(extension: str) -> str:
    """Resolve an audio MIME type from a file extension."""
    return MIME_TYPES.get(extension.lower().lstrip("."), DEFAULT_MIME_TYPE)


def _timestamp() -> str:
    """Current UTC time as ISO-8601 with a Z suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _parse_json(text: str) -> Any:
    """Parse a response body, raising ParseError when it is not JSON."""
    try:
        return json.loads(text)
    except ValueError as e:
        raise ParseError(str(e)) from e


@dataclass(frozen=True)
class OutboundResult:
    """Outcome of a webhook call."""

    success: bool
    message: str
    data: Optional[Any] = None

    @property
    def answer(self) -> str:
        """The endpoint's own answer when it sent one, else the message."""
        if isinstance(self.data, dict) and self.data.get("answer"):
            return str(self.data["answer"])
        return self.message


class WebhookSender:
    """
    Sends voice note notifications to the configured webhook.

    Every public method returns an OutboundResult and never raises.
    """

    def __init__(
        self,
        config: WebhookConfig,
        store: Optional[DocumentStore] = None,
        transport: Optional[Transport] = None,
    ):
        """
        Initialize the sender.

        Args:
            config: Endpoint, API key and language.
            store: Vault used to locate attachments for audio uploads.
            transport: HTTP transport (requests-based by default).
        """
        self._config = config
        self._config_lock = Lock()
        self.store = store
        self.transport = transport or RequestsTransport()

    @property
    def config(self) -> WebhookConfig:
        with self._config_lock:
            return self._config

    def update_config(
        self,
        url: str,
        api_key: str,
        language: Optional[str] = None,
    ) -> None:
        """Replace endpoint settings for subsequent calls."""
        with self._config_lock:
            changes: Dict[str, Any] = {"url": url, "api_key": api_key}
            if language is not None:
                changes["language"] = language
            self._config = replace(self._config, **changes)
        logger.info("Webhook configuration updated")

    def _headers(self, config: WebhookConfig) -> Dict[str, str]:
        return {AUTH_HEADER: config.api_key}

    def _post_json(
        self,
        config: WebhookConfig,
        payload: Dict[str, Any],
    ) -> Tuple[TransportResponse, Any]:
        """POST JSON and return the response with its parsed body (None if unparsable)."""
        response = self.transport.post_json(
            config.url,
            self._headers(config),
            payload,
            config.timeout,
        )
        self._check_status(response)

        if not response.text:
            return response, None
        try:
            return response, _parse_json(response.text)
        except ParseError as e:
            logger.debug(f"Ignoring non-JSON response body: {e}")
            return response, None

    @staticmethod
    def _check_status(response: TransportResponse) -> None:
        if not response.ok:
            raise HttpStatusError(response.status, response.text)

    def test_connection(self) -> OutboundResult:
        """Send a connectivity test payload to the webhook."""
        config = self.config
        payload = {
            "action": "test_connection",
            "timestamp": _timestamp(),
            "message": "Testing connection from VaultPulse",
        }

        try:
            response, data = self._post_json(config, payload)
        except HttpStatusError as e:
            return OutboundResult(False, f"Connection failed with status: {e.status}")
        except Exception as e:
            return OutboundResult(False, f"Connection error: {e}")

        return OutboundResult(
            True,
            f"Connection successful! Status: {response.status}",
            data,
        )

    def send_voice_note_metadata(
        self,
        file_name: str,
        file_date: str,
        content: Optional[str] = None,
    ) -> OutboundResult:
        """
        Notify the webhook that a voice note was recorded.

        Args:
            file_name: Name of the note holding the recording.
            file_date: Date of the note (YYYY-MM-DD).
            content: Summary of what was added, usually the embed text.

        Returns:
            OutboundResult with the parsed response body when available.
        """
        config = self.config
        payload = {
            "action": "voice_note_recorded",
            "fileName": file_name,
            "fileDate": file_date,
            "content": content,
            "timestamp": _timestamp(),
        }

        try:
            _, data = self._post_json(config, payload)
        except HttpStatusError as e:
            return OutboundResult(
                False, f"Failed to send voice note data. Status: {e.status}"
            )
        except Exception as e:
            return OutboundResult(False, f"Error sending voice note data: {e}")

        return OutboundResult(True, "Voice note data sent successfully!", data)

    def send_audio_file(
        self,
        audio_file_name: str,
        note_file_name: str,
        note_date: str,
        language: Optional[str] = None,
    ) -> OutboundResult:
        """
        Upload a recording as multipart/form-data.

        Args:
            audio_file_name: Bare file name of the attachment in the vault.
            note_file_name: Name of the note that embeds it.
            note_date: Date of the note (YYYY-MM-DD).
            language: Language tag for the recording. Defaults to the
                configured language.

        Returns:
            OutboundResult. A missing attachment fails without any request.
        """
        config = self.config

        try:
            path = self.store.find_attachment(audio_file_name) if self.store else None
            if path is None:
                raise NotFoundError(audio_file_name)

            audio = self.store.read_binary(path)
            extension = audio_file_name.rsplit(".", 1)[-1] if "." in audio_file_name else ""
            mime_type = get_mime_type(extension)

            fields = {
                "action": "audio_file_upload",
                "audioFileName": audio_file_name,
                "noteFileName": note_file_name,
                "noteDate": note_date,
                "mimeType": mime_type,
                "language": language or config.language,
                "timestamp": _timestamp(),
            }
            files = {"audio": (audio_file_name, audio, mime_type)}

            logger.debug(f"Uploading {audio_file_name} ({len(audio)} bytes, {mime_type})")
            response = self.transport.post_multipart(
                config.url,
                self._headers(config),
                fields,
                files,
                config.timeout,
            )
            self._check_status(response)
        except NotFoundError as e:
            return OutboundResult(False, str(e))
        except HttpStatusError as e:
            return OutboundResult(False, f"Failed to upload audio file. Status: {e.status}")
        except Exception as e:
            return OutboundResult(False, f"Error uploading audio file: {e}")

        try:
            data = _parse_json(response.text)
        except ParseError:
            data = {"text": response.text}

        return OutboundResult(True, "Audio file uploaded successfully!", data)

    def close(self) -> None:
        self.transport.close()
