"""Observability helpers: structured logging and Prometheus metrics."""

from wanda.obs import logging, metrics

__all__ = ["logging", "metrics"]
