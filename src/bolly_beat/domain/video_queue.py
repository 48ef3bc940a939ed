"""Pure playlist state: ordered videos, a playback pointer and query bookkeeping."""

from bolly_beat.domain.models import QueueSnapshot, VideoCandidate


def normalize_query(text: str) -> str:
    return text.strip().lower()


class VideoQueue:
    """
    Ordered, id-unique list of videos with a playback pointer.

    Every method is a synchronous transition that keeps these invariants:
    ids are unique, ``current_index`` stays inside ``items`` (0 when empty),
    and the item at ``current_index`` is never removed.
    """

    def __init__(self):
        self.items: list[VideoCandidate] = []
        self.current_index = 0
        self.searched_queries: set[str] = set()
        self.active_query_key = ""

    @property
    def current(self) -> VideoCandidate | None:
        if not self.items:
            return None
        return self.items[self.current_index]

    def has_searched(self, query: str) -> bool:
        return normalize_query(query) in self.searched_queries

    def mark_searched(self, query: str) -> None:
        self.searched_queries.add(normalize_query(query))

    def unique_new(self, videos: list[VideoCandidate]) -> list[VideoCandidate]:
        """Filters out videos already queued, and repeats within ``videos``."""
        seen = {item.id for item in self.items}
        unique = []
        for video in videos:
            if video.id not in seen:
                seen.add(video.id)
                unique.append(video)
        return unique

    def merge_append(self, videos: list[VideoCandidate]) -> int:
        """
        Merges results for a newly searched query.

        New items go in front of the list and the pointer shifts by their
        count, so the playing video stays current.

        Returns:
            Number of items added.
        """
        unique = self.unique_new(videos)
        if not unique:
            return 0

        if not self.items:
            self.items = unique
            self.current_index = 0
        else:
            self.items = unique + self.items
            self.current_index += len(unique)
        return len(unique)

    def start_replace(self, key: str) -> bool:
        """
        Drops everything after the playing video and claims ``key``.

        Returns:
            False when ``key`` is already the active query, leaving the
            queue untouched.
        """
        key = normalize_query(key)
        if key == self.active_query_key:
            return False

        if self.items:
            self.items = self.items[: self.current_index + 1]
        self.active_query_key = key
        return True

    def append_upcoming(self, videos: list[VideoCandidate]) -> int:
        """Adds unique videos after the existing items. Returns the count added."""
        unique = self.unique_new(videos)
        if not unique:
            return 0

        if not self.items:
            self.current_index = 0
        self.items = self.items + unique
        return len(unique)

    def begin_swap(self, outgoing_id: str) -> bool:
        """Moves playback off ``outgoing_id`` if it is still current and has a successor."""
        current = self.current
        if current is None or current.id != outgoing_id:
            return False
        if self.current_index + 1 >= len(self.items):
            return False
        self.current_index += 1
        return True

    def complete_swap(self, outgoing_id: str) -> bool:
        """Removes ``outgoing_id`` once playback has moved past it."""
        for index, item in enumerate(self.items):
            if item.id == outgoing_id:
                if index >= self.current_index:
                    return False
                del self.items[index]
                self.current_index -= 1
                return True
        return False

    def next(self) -> bool:
        if self.current_index + 1 >= len(self.items):
            return False
        self.current_index += 1
        return True

    def previous(self) -> bool:
        if self.current_index == 0:
            return False
        self.current_index -= 1
        return True

    def trim(self, lookahead: int, history: int) -> int:
        """
        Keeps at most ``lookahead`` items ahead and ``history`` behind the pointer.

        Returns:
            Number of items removed.
        """
        if not self.items:
            return 0

        start = max(0, self.current_index - history)
        end = min(len(self.items), self.current_index + lookahead + 1)
        removed = len(self.items) - (end - start)
        if removed:
            self.items = self.items[start:end]
            self.current_index -= start
        return removed

    def clear(self) -> None:
        self.items = []
        self.current_index = 0
        self.searched_queries = set()
        self.active_query_key = ""

    def snapshot(
        self, is_searching: bool = False, degraded: bool = False, error: str | None = None
    ) -> QueueSnapshot:
        return QueueSnapshot(
            items=list(self.items),
            current_index=self.current_index,
            active_query_key=self.active_query_key,
            is_searching=is_searching,
            degraded=degraded,
            error=error,
        )
