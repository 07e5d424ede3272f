"""Shared helpers."""

from model_traits.utils.logger import setup_logger

__all__ = ["setup_logger"]
