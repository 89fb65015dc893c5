"""Utility functions for pitch generation."""

from .logging import log, log_prompt, log_separator

__all__ = [
    "log",
    "log_separator",
    "log_prompt",
]
