"""Configuration management for VaultPulse."""

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, List

from dotenv import find_dotenv, load_dotenv

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

# Environment variables that override values from the config file
ENV_WEBHOOK_URL = "VAULTPULSE_WEBHOOK_URL"
ENV_API_KEY = "VAULTPULSE_API_KEY"


@dataclass(frozen=True)
class WebhookConfig:
    """Webhook endpoint configuration."""

    url: str = ""
    api_key: str = ""  # Sent as the obsidian_vault header
    language: str = "en"  # Only used for audio uploads
    timeout: float = 30.0


@dataclass
class VaultConfig:
    """Vault location configuration."""

    path: Path = field(default_factory=Path.cwd)

    ignore_patterns: List[str] = field(
        default_factory=lambda: [
            ".obsidian",
            ".trash",
        ]
    )


@dataclass
class MonitorConfig:
    """Monitor configuration."""

    upload_audio: bool = False  # Also upload the raw audio file


@dataclass
class Config:
    """Main configuration."""

    webhook: WebhookConfig = field(default_factory=WebhookConfig)
    vault: VaultConfig = field(default_factory=VaultConfig)
    monitor: MonitorConfig = field(default_factory=MonitorConfig)
    log_file: Optional[Path] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Config":
        """Create Config from dictionary."""
        vault_data = dict(data.get("vault", {}))
        if vault_data.get("path"):
            vault_data["path"] = Path(vault_data["path"]).expanduser()
        else:
            vault_data.pop("path", None)

        return cls(
            webhook=WebhookConfig(**data.get("webhook", {})),
            vault=VaultConfig(**vault_data),
            monitor=MonitorConfig(**data.get("monitor", {})),
            log_file=Path(data["log_file"]) if data.get("log_file") else None,
        )


def _apply_env_overrides(data: dict) -> dict:
    """Overlay webhook secrets from the environment onto raw config data."""
    webhook = dict(data.get("webhook", {}))

    url = os.environ.get(ENV_WEBHOOK_URL)
    if url:
        webhook["url"] = url

    api_key = os.environ.get(ENV_API_KEY)
    if api_key:
        webhook["api_key"] = api_key

    return {**data, "webhook": webhook}


def load_config(path: Path) -> Config:
    """
    Load configuration from TOML file.

    Webhook URL and API key may also come from the environment (or a .env
    file), which takes precedence over the file.

    Args:
        path: Path to config file.

    Returns:
        Config object (defaults if file doesn't exist).
    """
    load_dotenv(find_dotenv(usecwd=True))

    data: dict = {}
    if path.exists():
        with open(path, "rb") as f:
            data = tomllib.load(f)

    return Config.from_dict(_apply_env_overrides(data))


def get_default_config_toml() -> str:
    """Return default configuration as TOML string."""
    return '''# VaultPulse Configuration

[webhook]
url = ""              # Endpoint that receives voice note notifications
api_key = ""          # Sent as the obsidian_vault header
language = "en"       # Language tag sent with audio uploads
timeout = 30.0        # Seconds before an outbound call is abandoned

# VAULTPULSE_WEBHOOK_URL and VAULTPULSE_API_KEY (environment or .env)
# override the values above.

[vault]
path = "~/Documents/Vault"
ignore_patterns = [".obsidian", ".trash"]

[monitor]
upload_audio = false  # Also upload the recording itself

# Uncomment to enable file logging
# log_file = "~/.local/share/vaultpulse/vaultpulse.log"
'''
