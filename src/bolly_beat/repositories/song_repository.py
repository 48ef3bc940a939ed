"""Repository for song hookstep metadata, the song cache."""

from datetime import datetime, timezone

from sqlmodel import col, select

from bolly_beat.domain.models import Hookstep
from bolly_beat.exceptions import SongCacheError
from bolly_beat.infrastructure.db_models import SongHookstepRecord
from bolly_beat.infrastructure.interfaces import SongCache
from bolly_beat.logging import setup_logging

logger = setup_logging()


class SongHookstepRepository(SongCache):
    """
    Handles database operations for cached song hooksteps.

    Encapsulates SQL queries and transaction management,
    keeping the identifier free of database concerns.
    """

    def __init__(self, session_factory):
        """
        Initializes the repository.

        Args:
            session_factory: Callable that returns a SQLModel Session context manager.
        """
        self._session_factory = session_factory

    def find_by_title(self, title: str) -> Hookstep | None:
        try:
            with self._session_factory() as db_session:
                statement = (
                    select(SongHookstepRecord)
                    .where(col(SongHookstepRecord.song_title).ilike(f"%{title}%"))
                    .order_by(col(SongHookstepRecord.created_at))
                    .limit(1)
                )
                record = db_session.exec(statement).first()
                if record is None:
                    return None
                return _to_hookstep(record)
        except Exception as e:
            logger.exception("Song cache lookup failed", extra={"title": title})
            raise SongCacheError(title, "lookup", cause=e) from e

    def save(self, hookstep: Hookstep) -> Hookstep:
        try:
            with self._session_factory() as db_session:
                record = SongHookstepRecord(
                    **hookstep.model_dump(exclude={"id"}),
                    updated_at=datetime.now(timezone.utc),
                )
                db_session.add(record)
                db_session.commit()
                db_session.refresh(record)

                logger.info(
                    "Song hookstep cached",
                    extra={"song_title": record.song_title, "record_id": str(record.id)},
                )
                return _to_hookstep(record)
        except Exception as e:
            logger.exception(
                "Failed to cache song hookstep",
                extra={"song_title": hookstep.song_title},
            )
            raise SongCacheError(hookstep.song_title, "save", cause=e) from e


def _to_hookstep(record: SongHookstepRecord) -> Hookstep:
    return Hookstep.model_validate(
        {**record.model_dump(exclude={"created_at", "updated_at"}), "id": str(record.id)}
    )
