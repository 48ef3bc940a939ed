"""Abstract interface for continuous speech recognition streams."""

from abc import ABC, abstractmethod
from typing import Protocol


class SpeechListener(Protocol):
    """Receives events from a speech stream on the event loop thread."""

    def on_result(self, text: str, is_final: bool) -> None: ...

    def on_error(self, kind: str) -> None: ...

    def on_end(self) -> None: ...


class SpeechStream(ABC):
    """
    Abstract base class for streaming speech-to-text backends.

    A stream may end on its own at any time (network drop, service
    timeout); the listener's ``on_end`` is then called and the owner
    decides whether to open it again.
    """

    @property
    @abstractmethod
    def is_supported(self) -> bool:
        """Whether this environment can run the backend at all."""
        pass

    @abstractmethod
    def open(self, language: str, listener: SpeechListener) -> None:
        """
        Starts streaming without blocking. Must be called from the event loop.

        Raises:
            SpeechStreamError: If the stream cannot be started.
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Releases the recognition session. Safe to call when not open."""
        pass
