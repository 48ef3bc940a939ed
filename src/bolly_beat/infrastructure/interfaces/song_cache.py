"""Abstract interface for the song metadata cache."""

from abc import ABC, abstractmethod

from bolly_beat.domain.models import Hookstep


class SongCache(ABC):
    """Abstract base class for song metadata cache backends."""

    @abstractmethod
    def find_by_title(self, title: str) -> Hookstep | None:
        """
        Looks up a cached song whose title contains the given text.

        Args:
            title: Partial, case-insensitive song title.

        Returns:
            The first matching record or None.

        Raises:
            SongCacheError: If the cache lookup fails.
        """
        pass

    @abstractmethod
    def save(self, hookstep: Hookstep) -> Hookstep:
        """
        Stores a song record.

        Args:
            hookstep: The record to store.

        Returns:
            The stored record, including its assigned id.

        Raises:
            SongCacheError: If the cache write fails.
        """
        pass
