"""API route handlers."""

from api.routes import claims, health, stats, verify

__all__ = ["claims", "health", "stats", "verify"]
