"""Configuration management for the flashcard search engine."""

from .settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
