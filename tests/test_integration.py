"""End-to-end tests: vault on disk, real sender, mocked HTTP."""

import sys
from threading import Event
from unittest.mock import Mock, patch

import pytest

from vaultpulse.__main__ import main
from vaultpulse.config import WebhookConfig
from vaultpulse.core.monitor import VaultMonitor
from vaultpulse.store.vault import Vault
from vaultpulse.webhook.sender import AUTH_HEADER, OutboundResult, WebhookSender

EMBED = "![[Recording 20260105012858.m4a]]"


@pytest.fixture
def vault(tmp_path):
    root = tmp_path / "vault"
    root.mkdir()
    (root / "2026-01-05.md").write_text("", encoding="utf-8")
    (root / "Recording 20260105012858.m4a").write_bytes(b"m4a-bytes")
    return Vault(root)


@pytest.fixture
def monitor(vault):
    sender = WebhookSender(
        WebhookConfig(url="https://hooks.example.com/voice", api_key="secret"),
        store=vault,
    )
    monitor = VaultMonitor(Event(), vault, sender, upload_audio=True)
    monitor.warm_up()
    return monitor


class TestEndToEnd:
    """A recording added to today's note reaches the webhook."""

    @patch("requests.Session.post")
    def test_new_recording_posts_metadata_and_audio(self, mock_post, vault, monitor):
        mock_post.return_value = Mock(status_code=200, text='{"answer": "Transcribing"}')
        (vault.root / "2026-01-05.md").write_text(EMBED, encoding="utf-8")

        results = monitor.handle_modified(
            "2026-01-05.md", lambda: vault.read("2026-01-05.md")
        )

        assert [r.success for r in results] == [True, True]
        assert results[0].answer == "Transcribing"

        metadata_call, upload_call = mock_post.call_args_list
        payload = metadata_call.kwargs["json"]
        assert payload["action"] == "voice_note_recorded"
        assert payload["fileName"] == "2026-01-05"
        assert payload["fileDate"] == "2026-01-05"
        assert payload["content"] == EMBED
        assert metadata_call.kwargs["headers"] == {AUTH_HEADER: "secret"}

        assert upload_call.kwargs["data"]["mimeType"] == "audio/mp4"
        assert upload_call.kwargs["files"]["audio"][1] == b"m4a-bytes"

    @patch("requests.Session.post")
    def test_unchanged_recordings_post_nothing(self, mock_post, vault, monitor):
        (vault.root / "2026-01-05.md").write_text("just text", encoding="utf-8")

        assert monitor.handle_modified("2026-01-05.md", lambda: "just text") == []
        mock_post.assert_not_called()


class TestCli:
    """Test suite for the command line entry point."""

    @pytest.fixture(autouse=True)
    def keep_pytest_logging(self, monkeypatch):
        monkeypatch.setattr("vaultpulse.__main__.setup_logging", Mock())

    def test_show_config(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "argv", ["vaultpulse", "--show-config"])

        assert main() == 0
        assert "[webhook]" in capsys.readouterr().out

    @patch("requests.Session.post")
    def test_test_connection(self, mock_post, monkeypatch, tmp_path, capsys):
        mock_post.return_value = Mock(status_code=200, text="{}")
        config = tmp_path / "config.toml"
        config.write_text('[webhook]\nurl = "https://hooks.example.com"\napi_key = "k"\n')
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(
            sys, "argv", ["vaultpulse", "--config", str(config), "--test-connection"]
        )

        assert main() == 0
        assert "Connection successful! Status: 200" in capsys.readouterr().out

    def test_send_audio_missing_file(self, monkeypatch, vault, tmp_path, capsys):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(
            sys,
            "argv",
            [
                "vaultpulse",
                "--config", str(tmp_path / "missing.toml"),
                "--vault", str(vault.root),
                "--send-audio", "Recording nope.m4a",
                "--note", "2026-01-05",
            ],
        )

        assert main() == 1
        assert "Audio file not found: Recording nope.m4a" in capsys.readouterr().out

    def test_test_connection_goes_through_monitor(self, monkeypatch, tmp_path, capsys):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(
            sys,
            "argv",
            ["vaultpulse", "--config", str(tmp_path / "missing.toml"), "--test-connection"],
        )

        with patch.object(
            VaultMonitor,
            "test_connection",
            return_value=OutboundResult(False, "Connection failed with status: 503"),
        ) as mock_test:
            assert main() == 1

        mock_test.assert_called_once()
        assert "FAILED: Connection failed with status: 503" in capsys.readouterr().out
