"""Prometheus metrics exporter for docker compose apps."""

__version__ = "0.3.0"
