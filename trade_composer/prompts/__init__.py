"""Prompt templates."""

from .reply import REPLY_PROMPT

__all__ = ["REPLY_PROMPT"]
