"""MatchingClient — abstract base for the hosted vision oracle."""
from abc import ABC, abstractmethod

from src.encoder import EncodedImage


class MatchingClient(ABC):
    @abstractmethod
    async def compare(
        self,
        prompt: str,
        reference: EncodedImage,
        group: list[EncodedImage],
    ) -> str:
        """Send prompt, reference and group images in one request; return the raw reply text.

        Raises on transport failure.
        """
        ...
