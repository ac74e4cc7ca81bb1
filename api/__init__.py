"""API package - HTTP transport layer."""
