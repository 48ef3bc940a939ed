"""Abstract interface for LLM service operations."""

from abc import ABC, abstractmethod

from bolly_beat.domain.models import SongIdentification


class LLMService(ABC):
    """Abstract base class for LLM backends."""

    @abstractmethod
    def identify_song(self, request: str) -> SongIdentification:
        """
        Identifies a song from a free-text request and describes its hookstep.

        Args:
            request: The user's song name or description of what was heard.

        Returns:
            SongIdentification, with ``identified`` False when unknown.

        Raises:
            LLMServiceError: If the LLM call fails.
        """
        pass
