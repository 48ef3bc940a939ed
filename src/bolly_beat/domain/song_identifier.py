"""Identify-by-text: song cache first, LLM on a miss."""

from bolly_beat.domain.models import IdentifyResult
from bolly_beat.exceptions import InvalidQueryError, SongCacheError, SongNotIdentifiedError
from bolly_beat.infrastructure.interfaces import LLMService, SongCache
from bolly_beat.logging import setup_logging

logger = setup_logging()


class SongIdentifier:
    """Resolves a song name or a heard description to song and hookstep metadata."""

    def __init__(self, llm_service: LLMService, cache: SongCache):
        self._llm = llm_service
        self._cache = cache

    def identify(
        self, song_query: str | None = None, audio_description: str | None = None
    ) -> IdentifyResult:
        """
        Identifies a song, using the cache when a title is given.

        Args:
            song_query: A song title, matched against cached titles.
            audio_description: What the user heard or hummed; always goes to the LLM.

        Returns:
            IdentifyResult with the hookstep and whether it came from the cache.

        Raises:
            InvalidQueryError: If neither input is given.
            SongNotIdentifiedError: If the LLM cannot identify the song.
            LLMServiceError: If the LLM call fails.
        """
        song_query = (song_query or "").strip()
        audio_description = (audio_description or "").strip()
        if not song_query and not audio_description:
            raise InvalidQueryError()

        if song_query:
            cached = self._lookup(song_query)
            if cached is not None:
                logger.info(
                    "Hookstep retrieved from cache",
                    extra={"song_title": cached.song_title},
                )
                return IdentifyResult(hookstep=cached, cached=True)

        if song_query:
            request = f'The user is looking for the song: "{song_query}"'
        else:
            request = f'The user described hearing/humming: "{audio_description}"'

        identification = self._llm.identify_song(request)
        if not identification.identified or not identification.song_title:
            raise SongNotIdentifiedError(
                song_query or audio_description, identification.reason
            )

        hookstep = identification.to_hookstep()
        try:
            hookstep = self._cache.save(hookstep)
        except SongCacheError as e:
            logger.warning(
                "Hookstep not cached",
                extra={"song_title": hookstep.song_title, "error": str(e)},
            )

        return IdentifyResult(hookstep=hookstep, cached=False)

    def _lookup(self, song_query: str):
        try:
            return self._cache.find_by_title(song_query)
        except SongCacheError as e:
            logger.warning("Song cache unavailable, asking the LLM", extra={"error": str(e)})
            return None
