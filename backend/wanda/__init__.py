"""Wanda campus feed: trust and moderation engine."""

__version__ = "0.1.0"
