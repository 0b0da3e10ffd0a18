"""SecretVault — local secret storage with a JSON-file backend and a browser UI."""

__version__ = "0.1.0"
