"""Domain models for listening, recognition and the video feed."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class AudioSample(BaseModel, frozen=True):
    """A finished, time-bounded microphone capture."""

    data: bytes
    encoding: str = "audio/wav"
    duration_seconds: float = 0.0

    @property
    def size(self) -> int:
        return len(self.data)


class RecognizedTrack(BaseModel, frozen=True):
    """A song matched by the recognition service."""

    key: str
    title: str
    artist: str = ""
    cover_art_url: str | None = None
    url: str | None = None

    @property
    def search_query(self) -> str:
        """Title and artist joined, the way the feed searches for a song."""
        return f"{self.title} {self.artist}".strip()

    @classmethod
    def from_shazam(cls, track: dict[str, Any]) -> "RecognizedTrack":
        """
        Builds a track from a Shazam-compatible ``track`` object.

        Args:
            track: The raw track payload (key, title, subtitle, images, url).

        Returns:
            The normalized RecognizedTrack.
        """
        images = track.get("images")
        if not isinstance(images, dict):
            images = {}
        title = str(track.get("title") or "")
        artist = str(track.get("subtitle") or "")
        key = str(track.get("key") or f"{title} {artist}".strip())
        return cls(
            key=key,
            title=title,
            artist=artist,
            cover_art_url=images.get("coverart"),
            url=track.get("url"),
        )


class VideoCandidate(BaseModel, frozen=True, populate_by_name=True):
    """A single video search result; identity is the video id."""

    id: str
    title: str
    channel_title: str = Field(default="", alias="channelTitle")
    thumbnail: str = ""
    description: str = ""


class QueueMode(str, Enum):
    APPEND = "append"
    REPLACE = "replace"


class SearchOutcome(BaseModel, frozen=True):
    """
    Result of a video search.

    ``degraded`` is set when the index failed and the built-in fallback set
    was returned instead; ``error`` then carries the index failure.
    """

    query: str
    videos: list[VideoCandidate]
    degraded: bool = False
    error: str | None = None


class QueueSnapshot(BaseModel, frozen=True):
    """Read-only view of the video queue."""

    items: list[VideoCandidate]
    current_index: int
    active_query_key: str
    is_searching: bool = False
    degraded: bool = False
    error: str | None = None


class Hookstep(BaseModel):
    """Song metadata and its signature dance step."""

    id: str | None = None
    song_title: str
    movie_name: str | None = None
    release_year: int | None = None
    singers: list[str] = Field(default_factory=list)
    music_director: str | None = None
    hookstep_description: list[str] = Field(default_factory=list)
    hookstep_time_start: str | None = None
    hookstep_time_end: str | None = None
    youtube_video_id: str | None = None
    youtube_timestamp_seconds: int | None = None


class SongIdentification(BaseModel):
    """Structured LLM answer for an identify-by-text request."""

    identified: bool
    reason: str | None = None
    song_title: str | None = None
    movie_name: str | None = None
    release_year: int | None = None
    singers: list[str] | None = None
    music_director: str | None = None
    hookstep_description: list[str] | None = None
    hookstep_time_start: str | None = None
    hookstep_time_end: str | None = None
    youtube_video_id: str | None = None
    youtube_timestamp_seconds: int | None = None

    def to_hookstep(self) -> Hookstep:
        return Hookstep(
            song_title=self.song_title or "",
            movie_name=self.movie_name,
            release_year=self.release_year,
            singers=self.singers or [],
            music_director=self.music_director,
            hookstep_description=self.hookstep_description or [],
            hookstep_time_start=self.hookstep_time_start,
            hookstep_time_end=self.hookstep_time_end,
            youtube_video_id=self.youtube_video_id,
            youtube_timestamp_seconds=self.youtube_timestamp_seconds,
        )


class IdentifyResult(BaseModel, frozen=True):
    """Outcome of identify-by-text, flagged when served from the cache."""

    hookstep: Hookstep
    cached: bool


class AppState(str, Enum):
    IDLE = "idle"
    LISTENING = "listening"
    DISPLAYING_FEED = "displaying_feed"
    ERROR = "error"
