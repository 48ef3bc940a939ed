from pydantic import BaseModel

from bolly_beat.domain.models import (
    AppState,
    Hookstep,
    QueueSnapshot,
    RecognizedTrack,
)


class SessionSnapshot(BaseModel):
    """Everything the playback surface needs to render the session."""

    state: AppState
    session_id: str | None = None
    has_permission: bool
    transcription_supported: bool
    is_listening: bool
    current_track: RecognizedTrack | None = None
    transcript_preview: str = ""
    latest_query: str | None = None
    errors: dict[str, str]
    queue: QueueSnapshot


class IdentifySongRequest(BaseModel):
    """Either a song title or a description of what was heard."""

    song_query: str | None = None
    audio_description: str | None = None


class IdentifySongResponse(BaseModel):
    """Identified song with its hookstep, flagged when served from the cache."""

    success: bool = True
    data: Hookstep
    cached: bool
