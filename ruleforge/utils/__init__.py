"""Utilities shared by the CLI and the HTTP adapter."""

from .logger_config import EmojiFormatter, setup_logging

__all__ = ["EmojiFormatter", "setup_logging"]
