"""Abstract interface for song recognition."""

from abc import ABC, abstractmethod

from bolly_beat.domain.models import AudioSample, RecognizedTrack


class RecognitionService(ABC):
    """Abstract base class for audio fingerprint recognition backends."""

    @abstractmethod
    async def identify(self, sample: AudioSample) -> RecognizedTrack | None:
        """
        Matches an audio sample against a song catalogue.

        Args:
            sample: The captured audio.

        Returns:
            The recognized track, or None when nothing matched.

        Raises:
            RecognitionUnconfiguredError: If the service endpoint is missing.
            RecognitionTransportError: If the service call fails.
        """
        pass
