"""Async playlist engine: searches, scheduled swaps and deferred trims."""

import asyncio
from typing import Callable, TypeVar

from bolly_beat.domain.models import QueueMode, QueueSnapshot, SearchOutcome
from bolly_beat.domain.video_queue import VideoQueue, normalize_query
from bolly_beat.domain.video_search import VideoSearchClient
from bolly_beat.exceptions import (
    InvalidQueryError,
    VideoSearchTransportError,
    VideoSearchUnconfiguredError,
)
from bolly_beat.logging import setup_logging

logger = setup_logging()

T = TypeVar("T")


class VideoQueueEngine:
    """
    Owns a VideoQueue and the timing around it.

    All queue changes go through ``_apply``, which holds the lock and drops
    the change when the queue was cleared after the caller started. Each
    ``clear`` starts a new generation; searches and transitions belonging
    to an older generation are discarded.
    """

    def __init__(
        self,
        search_client: VideoSearchClient,
        max_results: int = 10,
        duration_hint: str = "short",
        swap_mount_delay_seconds: float = 0.3,
        swap_cleanup_delay_seconds: float = 0.5,
        trim_delay_seconds: float = 0.1,
        lookahead: int = 5,
        history: int = 10,
    ):
        self._search_client = search_client
        self._max_results = max_results
        self._duration_hint = duration_hint
        self._swap_mount_delay = swap_mount_delay_seconds
        self._swap_cleanup_delay = swap_cleanup_delay_seconds
        self._trim_delay = trim_delay_seconds
        self._lookahead = lookahead
        self._history = history

        self._queue = VideoQueue()
        self._lock = asyncio.Lock()
        self._generation = 0
        self._transitions: set[asyncio.Task] = set()
        self._searches_in_flight = 0
        self._error: str | None = None
        self._degraded = False

    @property
    def is_empty(self) -> bool:
        return not self._queue.items

    @property
    def error(self) -> str | None:
        return self._error

    async def enqueue(self, query: str, mode: QueueMode, key: str | None = None) -> int:
        """
        Searches for ``query`` and merges the results into the queue.

        Args:
            query: Search text.
            mode: APPEND merges new results in front of the playing video;
                REPLACE swaps out everything after it.
            key: Identity of the song behind the query (a track key);
                defaults to the normalized query.

        Returns:
            Number of videos added; 0 when the call was a no-op, failed,
            or was superseded.
        """
        if not query.strip():
            return 0

        if mode == QueueMode.APPEND:
            return await self._enqueue_append(query)
        return await self._enqueue_replace(query, key or query)

    async def _enqueue_append(self, query: str) -> int:
        generation = self._generation

        def claim(queue: VideoQueue) -> bool:
            if queue.has_searched(query):
                return False
            queue.mark_searched(query)
            return True

        if not await self._apply(generation, claim):
            return 0

        outcome = await self._search(generation, query)
        if outcome is None:
            return 0

        added = await self._apply(generation, lambda q: q.merge_append(outcome.videos))
        logger.info(
            "Queue appended",
            extra={"query": query, "added": added or 0, "size": len(self._queue.items)},
        )
        return added or 0

    async def _enqueue_replace(self, query: str, key: str) -> int:
        generation = self._generation
        identity = normalize_query(key)

        def claim(queue: VideoQueue) -> bool:
            if not queue.start_replace(identity):
                return False
            queue.mark_searched(query)
            return True

        if not await self._apply(generation, claim):
            logger.debug("Query already active", extra={"key": identity})
            return 0

        outcome = await self._search(generation, query)
        if outcome is None:
            return 0

        def merge(queue: VideoQueue) -> tuple[int, str | None]:
            if queue.active_query_key != identity:
                return 0, None
            had_playing = queue.current is not None
            added = queue.append_upcoming(outcome.videos)
            if had_playing and added:
                return added, queue.current.id
            return added, None

        result = await self._apply(generation, merge)
        if result is None:
            return 0

        added, outgoing_id = result
        if outgoing_id is not None:
            self._schedule(self._swap(generation, outgoing_id))

        logger.info(
            "Queue replaced",
            extra={"query": query, "key": identity, "added": added},
        )
        return added

    async def _search(self, generation: int, query: str) -> SearchOutcome | None:
        self._searches_in_flight += 1
        try:
            outcome = await self._search_client.search(
                query, self._max_results, self._duration_hint
            )
        except InvalidQueryError:
            return None
        except (VideoSearchTransportError, VideoSearchUnconfiguredError) as e:
            logger.error("Video search failed", extra={"query": query, "error": str(e)})
            if generation == self._generation:
                self._error = str(e)
            return None
        finally:
            self._searches_in_flight -= 1

        if generation != self._generation:
            logger.debug("Discarding stale search results", extra={"query": query})
            return None

        self._degraded = outcome.degraded
        self._error = outcome.error
        return outcome

    async def _swap(self, generation: int, outgoing_id: str) -> None:
        await asyncio.sleep(self._swap_mount_delay)
        advanced = await self._apply(generation, lambda q: q.begin_swap(outgoing_id))
        if not advanced:
            return

        await asyncio.sleep(self._swap_cleanup_delay)
        removed = await self._apply(generation, lambda q: q.complete_swap(outgoing_id))
        if removed:
            logger.debug("Swapped out previous video", extra={"video_id": outgoing_id})

    async def _trim(self, generation: int) -> None:
        await asyncio.sleep(self._trim_delay)
        await self._apply(generation, lambda q: q.trim(self._lookahead, self._history))

    async def go_to_next(self) -> bool:
        generation = self._generation
        moved = await self._apply(generation, lambda q: q.next())
        if moved:
            self._schedule(self._trim(generation))
        return bool(moved)

    async def go_to_previous(self) -> bool:
        moved = await self._apply(self._generation, lambda q: q.previous())
        return bool(moved)

    async def clear(self) -> None:
        """Empties the queue and discards any in-flight searches and transitions."""
        self._generation += 1
        for task in list(self._transitions):
            task.cancel()

        async with self._lock:
            self._queue.clear()
            self._error = None
            self._degraded = False
        logger.info("Queue cleared")

    async def wait_for_transitions(self) -> None:
        """Waits until every scheduled swap and trim has finished or been cancelled."""
        while self._transitions:
            await asyncio.gather(*list(self._transitions), return_exceptions=True)

    def snapshot(self) -> QueueSnapshot:
        return self._queue.snapshot(
            is_searching=self._searches_in_flight > 0,
            degraded=self._degraded,
            error=self._error,
        )

    async def _apply(self, generation: int, mutation: Callable[[VideoQueue], T]) -> T | None:
        async with self._lock:
            if generation != self._generation:
                return None
            return mutation(self._queue)

    def _schedule(self, coro) -> None:
        task = asyncio.create_task(coro)
        self._transitions.add(task)
        task.add_done_callback(self._transitions.discard)
