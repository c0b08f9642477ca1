"""Utility functions."""

from .logging_utils import configure_logging

__all__ = ["configure_logging"]
