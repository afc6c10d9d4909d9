"""HTTP API for ConfigHub."""
