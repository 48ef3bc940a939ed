"""Video search with keyword augmentation and a degraded fallback."""

from bolly_beat.domain.fallback_videos import FALLBACK_VIDEOS
from bolly_beat.domain.models import SearchOutcome
from bolly_beat.exceptions import InvalidQueryError, VideoSearchTransportError
from bolly_beat.infrastructure.interfaces import VideoIndex
from bolly_beat.logging import setup_logging

logger = setup_logging()


class VideoSearchClient:
    """Turns a song or transcript query into ranked dance videos."""

    def __init__(
        self,
        index: VideoIndex,
        keyword: str = "dance",
        fallback_enabled: bool = True,
    ):
        self._index = index
        self._keyword = keyword
        self._fallback_enabled = fallback_enabled

    async def search(
        self, query: str, max_results: int = 10, duration_hint: str = "short"
    ) -> SearchOutcome:
        """
        Searches the video index for dance videos matching a query.

        Args:
            query: Free text, typically "{title} {artist}" or a transcript.
            max_results: Maximum number of videos.
            duration_hint: Duration bucket passed to the index.

        Returns:
            SearchOutcome; ``degraded`` is set when the fallback set was used.

        Raises:
            InvalidQueryError: If the query is empty after trimming.
            VideoSearchUnconfiguredError: If the index is not configured.
            VideoSearchTransportError: If the index fails and fallback is off.
        """
        trimmed = query.strip()
        if not trimmed:
            raise InvalidQueryError()

        augmented = f"{trimmed} {self._keyword}".strip()

        try:
            videos = await self._index.search(augmented, max_results, duration_hint)
        except VideoSearchTransportError as e:
            if not self._fallback_enabled:
                raise
            logger.warning(
                "Video search failed, serving fallback videos",
                extra={"query": trimmed, "error": str(e)},
            )
            return SearchOutcome(
                query=trimmed,
                videos=list(FALLBACK_VIDEOS[:max_results]),
                degraded=True,
                error=str(e),
            )

        return SearchOutcome(query=trimmed, videos=videos)
