"""Abstract interface for video index lookups."""

from abc import ABC, abstractmethod

from bolly_beat.domain.models import VideoCandidate


class VideoIndex(ABC):
    """Abstract base class for external video search backends."""

    @abstractmethod
    async def search(
        self, query: str, max_results: int, duration_hint: str
    ) -> list[VideoCandidate]:
        """
        Returns ranked videos for an already augmented query.

        Args:
            query: The search text sent to the index as-is.
            max_results: Maximum number of results.
            duration_hint: Duration bucket preference (e.g. "short").

        Returns:
            Videos in ranking order.

        Raises:
            VideoSearchUnconfiguredError: If credentials or endpoint are missing.
            VideoSearchTransportError: If the index call fails.
        """
        pass
