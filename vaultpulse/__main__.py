"""CLI entry point for VaultPulse."""

import argparse
import logging
import sys
from pathlib import Path
from threading import Event

from .config import load_config, get_default_config_toml
from .core.monitor import VaultMonitor
from .store.vault import Vault
from .utils.logging import setup_logging
from .utils.signals import install_signal_handlers
from .webhook.sender import WebhookSender

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vaultpulse",
        description="Watch daily notes for new voice recordings and notify a webhook",
    )

    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=Path.home() / ".config" / "vaultpulse" / "config.toml",
        help="Path to configuration file",
    )

    parser.add_argument(
        "--vault",
        type=Path,
        help="Vault directory (overrides config)",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print detected recordings without calling the webhook",
    )

    parser.add_argument(
        "--upload-audio",
        action="store_true",
        help="Also upload each new recording's audio file",
    )

    parser.add_argument(
        "--show-config",
        action="store_true",
        help="Show default configuration and exit",
    )

    parser.add_argument(
        "--test-connection",
        action="store_true",
        help="Send a test payload to the webhook and exit",
    )

    parser.add_argument(
        "--send-audio",
        metavar="FILE",
        help="Upload an audio attachment from the vault and exit (requires --note)",
    )

    parser.add_argument(
        "--note",
        metavar="DATE",
        help="Date note the uploaded audio belongs to, e.g. 2026-01-05",
    )

    return parser


def main() -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if args.show_config:
        print(get_default_config_toml())
        return 0

    if args.send_audio and not args.note:
        parser.error("--send-audio requires --note")

    config = load_config(args.config)
    if args.vault:
        config.vault.path = args.vault.expanduser()

    setup_logging(
        verbose=args.verbose,
        log_file=config.log_file,
    )

    if not config.webhook.url and not args.dry_run:
        logger.warning("No webhook URL configured; every notification will fail")

    vault = Vault(config.vault.path, ignore_patterns=config.vault.ignore_patterns)
    sender = WebhookSender(config.webhook, store=vault)

    shutdown_event = Event()
    monitor = VaultMonitor(
        shutdown_event=shutdown_event,
        store=vault,
        sender=sender,
        upload_audio=args.upload_audio or config.monitor.upload_audio,
        dry_run=args.dry_run,
    )

    if args.test_connection:
        result = monitor.test_connection()
        print(f"{'OK' if result.success else 'FAILED'}: {result.answer}")
        sender.close()
        return 0 if result.success else 1

    if args.send_audio:
        result = sender.send_audio_file(args.send_audio, args.note, args.note)
        print(f"{'OK' if result.success else 'FAILED'}: {result.answer}")
        sender.close()
        return 0 if result.success else 1

    def reload_config() -> None:
        reloaded = load_config(args.config)
        reloaded.monitor.upload_audio = reloaded.monitor.upload_audio or args.upload_audio
        monitor.apply_config(reloaded)

    install_signal_handlers(shutdown_event, reload_callback=reload_config)

    try:
        monitor.run()
    except KeyboardInterrupt:
        pass

    return 0


if __name__ == "__main__":
    sys.exit(main())
