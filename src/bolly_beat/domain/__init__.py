"""Domain layer exports.

Only the models are re-exported here; the services live in their own
modules because they depend on the infrastructure interfaces, which in
turn depend on these models.
"""

from bolly_beat.domain.models import (
    AppState,
    AudioSample,
    Hookstep,
    IdentifyResult,
    QueueMode,
    QueueSnapshot,
    RecognizedTrack,
    SearchOutcome,
    SongIdentification,
    VideoCandidate,
)

__all__ = [
    "AppState",
    "AudioSample",
    "Hookstep",
    "IdentifyResult",
    "QueueMode",
    "QueueSnapshot",
    "RecognizedTrack",
    "SearchOutcome",
    "SongIdentification",
    "VideoCandidate",
]
