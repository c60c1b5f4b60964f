"""
Abstract base class for trade definitions.
"""

from abc import ABC, abstractmethod
from typing import Any

from trade_composer.core.models import LabelExtension, PromptFacts


class BaseTrade(ABC):
    """
    One trade's contribution to the registry: a raw behavior definition,
    a label extension, and the vocabulary used by the reply prompt.
    """

    name: str = ""
    aliases: tuple[str, ...] = ()

    @abstractmethod
    def behavior(self) -> dict[str, Any]:
        """
        Raw behavior definition in the camelCase schema shape.

        Returns:
            Dict with voiceProfile, behaviorGoals, autoReplyPolicy,
            followUpGuidelines, upsellGuidelines, categoryOverrides, signature
        """
        pass

    @abstractmethod
    def label_extension(self) -> LabelExtension:
        """Overrides and additions applied to the universal taxonomy."""
        pass

    def prompt_facts(self) -> PromptFacts:
        return PromptFacts()

    def matches(self, trade_type: str) -> bool:
        """Case-sensitive match on name or alias."""
        return trade_type == self.name or trade_type in self.aliases
