"""Idempotent ingestion of posts from official external sources."""
