"""Configuration processors."""

from .base import BaseProcessor
from .profile import ProfileProcessor

__all__ = ["BaseProcessor", "ProfileProcessor"]
