"""SecretVault HTTP API."""
