"""Observability layer: in-memory metrics. No external SaaS."""

from eventrepo.observability.metrics import MetricsCollector

__all__ = ["MetricsCollector"]
