"""VaultPulse: report new voice recordings in daily notes to a webhook."""

__version__ = "0.1.0"
