"""API routers for all endpoints."""

from pulseboard.routers import formatting, metrics, system

__all__ = [
    "formatting",
    "metrics",
    "system",
]
