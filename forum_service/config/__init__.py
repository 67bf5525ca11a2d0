"""Configuration package for the forum service."""

from .settings import Settings, settings

__all__ = ["Settings", "settings"]
