"""Identify-by-text endpoint."""

from fastapi import APIRouter, HTTPException

from bolly_beat.exceptions import (
    InvalidQueryError,
    LLMServiceError,
    SongNotIdentifiedError,
)
from bolly_beat.logging import setup_logging
from bolly_beat.response_models import IdentifySongRequest, IdentifySongResponse
from bolly_beat.routes.dependencies import SongIdentifierDep

logger = setup_logging()

router = APIRouter(prefix="/songs", tags=["songs"])


@router.post("/identify", response_model=IdentifySongResponse)
def identify_song(body: IdentifySongRequest, identifier: SongIdentifierDep):
    """Identifies a song by title or description and returns its hookstep."""
    try:
        result = identifier.identify(body.song_query, body.audio_description)
    except InvalidQueryError:
        raise HTTPException(
            status_code=400,
            detail="Either song_query or audio_description is required",
        )
    except SongNotIdentifiedError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except LLMServiceError as e:
        logger.error(f"Error identifying song: {e}")
        raise HTTPException(status_code=502, detail="Song identification service failed")

    return IdentifySongResponse(data=result.hookstep, cached=result.cached)
