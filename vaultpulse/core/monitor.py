"""Main vault monitoring orchestration."""

import logging
from threading import Event
from typing import Callable, List

from ..config import Config
from ..detectors.base import BaseDetector
from ..detectors.filesystem import VaultDetector
from ..filters.eligibility import is_eligible, is_markdown
from ..filters.snapshot import SnapshotTracker
from ..store.base import DocumentStore
from ..store.vault import Vault
from ..webhook.sender import OutboundResult, WebhookSender
from .notification import VoiceNoteNotification
from .recordings import describe, diff, order_by_position

logger = logging.getLogger(__name__)


class VaultMonitor:
    """
    Main monitoring orchestrator.

    Coordinates the detector, snapshot tracker and webhook sender to report
    recordings newly embedded in date notes.
    """

    def __init__(
        self,
        shutdown_event: Event,
        store: DocumentStore,
        sender: WebhookSender,
        upload_audio: bool = False,
        dry_run: bool = False,
    ):
        """
        Initialize the vault monitor.

        Args:
            shutdown_event: Event to signal shutdown.
            store: Vault holding the notes and attachments.
            sender: Webhook sender for notifications.
            upload_audio: Also upload each new recording's audio file.
            dry_run: If True, print instead of calling the webhook.
        """
        self.shutdown_event = shutdown_event
        self.store = store
        self.sender = sender
        self.upload_audio = upload_audio
        self.dry_run = dry_run

        # Components
        self._detectors: List[BaseDetector] = []
        self._tracker = SnapshotTracker()

        # Stats
        self._notifications_sent = 0
        self._notifications_failed = 0

    @property
    def tracker(self) -> SnapshotTracker:
        return self._tracker

    def warm_up(self) -> int:
        """Snapshot every date note so existing recordings are not reported."""
        return self._tracker.initialize(self.store)

    def handle_modified(
        self,
        path: str,
        reader: Callable[[], str],
    ) -> List[OutboundResult]:
        """
        Handle a modified note.

        This is called by detectors for every note change.

        Args:
            path: Vault path of the note.
            reader: Returns the note's current text.

        Returns:
            One result per dispatch attempt (empty if nothing new).
        """
        if not is_markdown(path) or not is_eligible(path):
            return []

        try:
            new_content = reader()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read {path}: {e}")
            return []

        # Swap before any outbound call; dispatch uses only the computed diff
        old_content = self._tracker.on_modified(path, new_content)
        added = diff(old_content, new_content)
        if not added:
            return []

        logger.info(f"New audio recording(s) detected in {path}: {describe(added)}")

        results = []
        for reference in order_by_position(added, new_content):
            notification = VoiceNoteNotification(note_path=path, reference=reference)
            results.extend(self._dispatch(notification))
        return results

    def handle_moved(
        self,
        src_path: str,
        dest_path: str,
        reader: Callable[[], str],
    ) -> List[OutboundResult]:
        """
        Handle a note moved or renamed within the vault.

        A tracked note keeps its snapshot under the new path, so only
        recordings added as part of the move are reported. An untracked
        source (e.g. an editor's temp file saved over the note) is treated
        as a plain modification of dest_path.
        """
        if is_markdown(dest_path) and self._tracker.carry_over(src_path, dest_path):
            logger.debug(f"Note moved: {src_path} -> {dest_path}")
        return self.handle_modified(dest_path, reader)

    def _dispatch(self, notification: VoiceNoteNotification) -> List[OutboundResult]:
        """Send one notification (and optionally its audio) to the webhook."""
        log_msg = f"[{notification.timestamp.strftime('%H:%M:%S')}] {notification}"

        if self.dry_run:
            print(f"[DRY RUN] {log_msg}")
            logger.info(f"Dry run: {log_msg}")
            return []

        logger.info(f"Sending to webhook: {log_msg}")
        results = [
            self.sender.send_voice_note_metadata(
                notification.note_name,
                notification.note_date,
                notification.reference.raw,
            )
        ]

        if self.upload_audio:
            results.append(
                self.sender.send_audio_file(
                    notification.reference.file_name,
                    notification.note_name,
                    notification.note_date,
                )
            )

        for result in results:
            self._report(result)
        return results

    def _report(self, result: OutboundResult) -> None:
        if result.success:
            self._notifications_sent += 1
            logger.info(f"Webhook: {result.answer}")
            logger.debug(f"Webhook response: {result.data}")
        else:
            self._notifications_failed += 1
            logger.error(f"Webhook error: {result.message}")

    def test_connection(self) -> OutboundResult:
        """Check that the webhook is reachable and report the outcome."""
        logger.info("Testing webhook connection...")
        result = self.sender.test_connection()
        if result.success:
            logger.info(result.answer)
            logger.debug(f"Webhook test response: {result.data}")
        else:
            logger.error(f"Webhook test failed: {result.message}")
        return result

    def apply_config(self, config: Config) -> None:
        """Push reloaded settings into the running monitor."""
        self.sender.update_config(
            config.webhook.url,
            config.webhook.api_key,
            language=config.webhook.language,
        )
        self.upload_audio = config.monitor.upload_audio

    def start(self) -> None:
        """Snapshot the vault and start all detectors."""
        logger.info("Starting VaultPulse monitor...")

        self.warm_up()

        if isinstance(self.store, Vault):
            detector = VaultDetector(
                callback=self.handle_modified,
                moved_callback=self.handle_moved,
                shutdown_event=self.shutdown_event,
                vault=self.store,
            )
            self._detectors.append(detector)
            detector.start()
        else:
            logger.warning("Store cannot be watched; no detector started")

        logger.info(f"Started {len(self._detectors)} detector(s)")

    def run(self) -> None:
        """Run the monitor until shutdown."""
        self.start()

        # Wait for shutdown signal
        try:
            while not self.shutdown_event.is_set():
                self.shutdown_event.wait(timeout=1.0)
        except KeyboardInterrupt:
            logger.info("Keyboard interrupt received")

        self.stop()

    def stop(self) -> None:
        """Stop all detectors and clean up."""
        logger.info("Stopping VaultPulse...")

        for detector in self._detectors:
            try:
                detector.stop()
            except Exception as e:
                logger.error(f"Error stopping {detector.name}: {e}")
        self._detectors.clear()

        self.sender.close()

        logger.info(
            f"Sent {self._notifications_sent} webhook call(s), "
            f"{self._notifications_failed} failed"
        )
        logger.info("VaultPulse stopped")
