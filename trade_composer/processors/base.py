"""
Abstract base class for configuration processors.
"""

from abc import ABC, abstractmethod

from trade_composer.core.models import ClientProfile, ProfileRequest


class BaseProcessor(ABC):
    """Abstract processor interface for client configuration pipelines."""

    @abstractmethod
    def process(self, request: ProfileRequest) -> ClientProfile:
        """
        Compose every artifact for one client.

        Args:
            request: Trade types, entities and business facts of the client

        Returns:
            ClientProfile with the composed artifacts and collected warnings
        """
        pass
