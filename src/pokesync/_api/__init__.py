"""Endpoint modules for the pokesync JSON API (internal)."""
