"""Fetchers, converters, CPU usage filtering and default-interface discovery for Kubernetes metrics."""

__version__ = "0.1.0"

__all__ = [
    "combinators",
    "convert",
    "cpu_filter",
    "fetch",
    "network",
]