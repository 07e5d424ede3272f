"""Configuration module."""

from model_traits.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
