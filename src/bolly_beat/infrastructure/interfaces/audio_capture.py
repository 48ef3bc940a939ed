"""Abstract interface for microphone capture."""

import asyncio
from abc import ABC, abstractmethod

from bolly_beat.domain.models import AudioSample
from bolly_beat.exceptions import AudioTooShortError, CaptureBusyError


class AudioCapture(ABC):
    """
    Base class for microphone capture backends.

    Only one capture runs at a time; a second ``capture`` call while one is
    active is rejected with CaptureBusyError rather than queued.
    """

    def __init__(self, min_sample_bytes: int):
        self._min_sample_bytes = min_sample_bytes
        self._stop_requested: asyncio.Event | None = None

    @property
    def is_capturing(self) -> bool:
        return self._stop_requested is not None

    async def capture(self, max_duration_seconds: float) -> AudioSample:
        """
        Records until the duration elapses or ``stop_capture`` is called.

        Args:
            max_duration_seconds: Upper bound for the recording.

        Returns:
            The captured AudioSample.

        Raises:
            CaptureBusyError: If another capture is active.
            MicrophonePermissionError: If the microphone cannot be opened.
            AudioTooShortError: If the sample is below the usable minimum.
        """
        if self._stop_requested is not None:
            raise CaptureBusyError()

        self._stop_requested = asyncio.Event()
        try:
            sample = await self._record(max_duration_seconds, self._stop_requested)
        finally:
            self._stop_requested = None

        if sample.size < self._min_sample_bytes:
            raise AudioTooShortError(sample.size, self._min_sample_bytes)
        return sample

    def stop_capture(self) -> None:
        """Ends the active capture early; the partial sample is still returned."""
        if self._stop_requested is not None:
            self._stop_requested.set()

    @abstractmethod
    async def check_permission(self) -> None:
        """
        Verifies that the microphone can be opened, without recording.

        Raises:
            MicrophonePermissionError: If access is refused or no input exists.
        """
        pass

    @abstractmethod
    async def _record(
        self, max_duration_seconds: float, stop_requested: asyncio.Event
    ) -> AudioSample:
        """
        Records audio, holding the device only for the duration of the call.

        Args:
            max_duration_seconds: Upper bound for the recording.
            stop_requested: Set when the caller wants the recording cut short.

        Returns:
            Whatever was captured, possibly empty.
        """
        pass
