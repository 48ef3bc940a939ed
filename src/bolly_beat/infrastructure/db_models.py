from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID, uuid4

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


def _now() -> datetime:
    return datetime.now(timezone.utc)


class SongHookstepRecord(SQLModel, table=True):
    __tablename__ = "song_hooksteps"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    song_title: str = Field(index=True)
    movie_name: Optional[str] = None
    release_year: Optional[int] = None
    singers: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    music_director: Optional[str] = None
    hookstep_description: List[str] = Field(
        default_factory=list, sa_column=Column(JSON, nullable=False)
    )
    hookstep_time_start: Optional[str] = None
    hookstep_time_end: Optional[str] = None
    youtube_video_id: Optional[str] = None
    youtube_timestamp_seconds: Optional[int] = None
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)
