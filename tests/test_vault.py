"""Tests for the on-disk vault store."""

import pytest

from vaultpulse.store.vault import Vault


@pytest.fixture
def vault_dir(tmp_path):
    (tmp_path / "Daily").mkdir()
    (tmp_path / "Daily" / "2026-01-05.md").write_text("five", encoding="utf-8")
    (tmp_path / "2026-01-06.md").write_text("six", encoding="utf-8")
    (tmp_path / "Projects.md").write_text("projects", encoding="utf-8")
    (tmp_path / ".obsidian").mkdir()
    (tmp_path / ".obsidian" / "workspace.md").write_text("cfg", encoding="utf-8")
    (tmp_path / "Attachments").mkdir()
    (tmp_path / "Attachments" / "Recording 20260105012858.m4a").write_bytes(b"audio")
    return tmp_path


class TestVault:
    """Test suite for Vault."""

    def test_list_documents(self, vault_dir):
        vault = Vault(vault_dir)

        assert vault.list_documents() == [
            "2026-01-06.md",
            "Daily/2026-01-05.md",
            "Projects.md",
        ]

    def test_list_documents_missing_root(self, tmp_path):
        assert Vault(tmp_path / "nope").list_documents() == []

    def test_read(self, vault_dir):
        assert Vault(vault_dir).read("Daily/2026-01-05.md") == "five"

    def test_read_missing_raises(self, vault_dir):
        with pytest.raises(OSError):
            Vault(vault_dir).read("2026-02-01.md")

    def test_find_attachment_by_bare_name(self, vault_dir):
        vault = Vault(vault_dir)

        path = vault.find_attachment("Recording 20260105012858.m4a")

        assert path == "Attachments/Recording 20260105012858.m4a"
        assert vault.read_binary(path) == b"audio"

    def test_find_attachment_missing(self, vault_dir):
        vault = Vault(vault_dir)

        assert vault.find_attachment("Recording nope.m4a") is None
        assert vault.find_attachment("") is None
        assert vault.find_attachment("Attachments/Recording 20260105012858.m4a") is None

    def test_relative_path(self, vault_dir, tmp_path_factory):
        vault = Vault(vault_dir)

        assert vault.relative_path(vault_dir / "Daily" / "2026-01-05.md") == "Daily/2026-01-05.md"
        outside = tmp_path_factory.mktemp("elsewhere") / "2026-01-05.md"
        assert vault.relative_path(outside) is None

    def test_should_ignore(self, vault_dir):
        vault = Vault(vault_dir, ignore_patterns=[".obsidian", "Templates"])

        assert vault.should_ignore(".obsidian/workspace.md")
        assert vault.should_ignore("Templates/2026-01-01.md")
        assert not vault.should_ignore("Daily/2026-01-05.md")
