"""Operational scripts for ConfigHub."""
