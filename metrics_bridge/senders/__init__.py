"""Sender interface and the bundled logging sender."""
from .base import Sender, SenderError
from .log_sender import LoggingSender

__all__ = ["LoggingSender", "Sender", "SenderError"]
