"""Routes package - Flask blueprints."""

from .relay import relay_bp

__all__ = ["relay_bp"]
