"""Test doubles for the infrastructure interfaces."""

import asyncio

from bolly_beat.domain.models import (
    AudioSample,
    Hookstep,
    RecognizedTrack,
    SongIdentification,
    VideoCandidate,
)
from bolly_beat.domain.queue_engine import VideoQueueEngine
from bolly_beat.domain.recognition_scheduler import RecognitionScheduler
from bolly_beat.domain.transcription import ContinuousTranscriber
from bolly_beat.domain.video_search import VideoSearchClient
from bolly_beat.exceptions import MicrophonePermissionError
from bolly_beat.handlers import SessionController
from bolly_beat.infrastructure.interfaces import (
    AudioCapture,
    LLMService,
    RecognitionService,
    SongCache,
    SpeechListener,
    SpeechStream,
    VideoIndex,
)


def make_videos(*ids: str) -> list[VideoCandidate]:
    return [VideoCandidate(id=i, title=f"Video {i}") for i in ids]


def make_track(key: str, title: str = "Ram Aayenge", artist: str = "Vishal Mishra"):
    return RecognizedTrack(key=key, title=title, artist=artist)


class FakeCapture(AudioCapture):
    """Returns a fixed-size sample, optionally holding the "microphone" open."""

    def __init__(
        self, sample_bytes: int = 4000, hold_seconds: float = 0.0, denied=False, revoked=False
    ):
        super().__init__(min_sample_bytes=1000)
        self.sample_bytes = sample_bytes
        self.hold_seconds = hold_seconds
        self.denied = denied
        self.revoked = revoked
        self.captures = 0

    async def check_permission(self) -> None:
        if self.denied:
            raise MicrophonePermissionError()

    async def _record(self, max_duration_seconds, stop_requested):
        self.captures += 1
        if self.revoked:
            raise MicrophonePermissionError()
        if self.hold_seconds:
            try:
                await asyncio.wait_for(stop_requested.wait(), timeout=self.hold_seconds)
            except asyncio.TimeoutError:
                pass
        return AudioSample(data=b"\x00" * self.sample_bytes)


class FakeRecognizer(RecognitionService):
    """Plays back queued results; exceptions in the queue are raised."""

    def __init__(self, *results):
        self.results = list(results)
        self.calls = 0

    async def identify(self, sample):
        self.calls += 1
        result = self.results.pop(0) if self.results else None
        if isinstance(result, Exception):
            raise result
        return result


class FakeVideoIndex(VideoIndex):
    """
    Answers by query text.

    An optional gate holds every search until set; entries in ``gates`` hold
    only the matching query, so searches can be released out of order.
    """

    def __init__(self, responses=None, error: Exception | None = None):
        self.responses = responses or {}
        self.error = error
        self.queries: list[str] = []
        self.gate: asyncio.Event | None = None
        self.started: asyncio.Event | None = None
        self.gates: dict[str, asyncio.Event] = {}

    async def search(self, query, max_results, duration_hint):
        self.queries.append(query)
        if self.started is not None:
            self.started.set()
        if self.gate is not None:
            await self.gate.wait()
        if query in self.gates:
            await self.gates[query].wait()
        if self.error is not None:
            raise self.error
        return list(self.responses.get(query, []))


class FakeSpeechStream(SpeechStream):
    def __init__(self, supported: bool = True):
        self.supported = supported
        self.opened = 0
        self.closed = 0
        self.listener: SpeechListener | None = None

    @property
    def is_supported(self) -> bool:
        return self.supported

    def open(self, language, listener):
        self.opened += 1
        self.listener = listener

    def close(self):
        self.closed += 1


class FakeLLM(LLMService):
    def __init__(self, identification: SongIdentification | Exception):
        self.identification = identification
        self.requests: list[str] = []

    def identify_song(self, request):
        self.requests.append(request)
        if isinstance(self.identification, Exception):
            raise self.identification
        return self.identification


class FakeSongCache(SongCache):
    def __init__(self, records=None, lookup_error=None, save_error=None):
        self.records: list[Hookstep] = list(records or [])
        self.lookup_error = lookup_error
        self.save_error = save_error

    def find_by_title(self, title):
        if self.lookup_error is not None:
            raise self.lookup_error
        for record in self.records:
            if title.lower() in record.song_title.lower():
                return record
        return None

    def save(self, hookstep):
        if self.save_error is not None:
            raise self.save_error
        stored = hookstep.model_copy(update={"id": f"id-{len(self.records) + 1}"})
        self.records.append(stored)
        return stored


def build_controller(
    capture: FakeCapture | None = None,
    index: FakeVideoIndex | None = None,
    stream: FakeSpeechStream | None = None,
) -> SessionController:
    """A session controller over fakes, with no transition delays."""
    capture = capture or FakeCapture()
    scheduler = RecognitionScheduler(capture, FakeRecognizer(), warmup_seconds=60)
    transcriber = ContinuousTranscriber(stream or FakeSpeechStream())
    engine = VideoQueueEngine(
        VideoSearchClient(index or FakeVideoIndex(), fallback_enabled=False),
        swap_mount_delay_seconds=0,
        swap_cleanup_delay_seconds=0,
        trim_delay_seconds=0,
    )
    return SessionController(
        capture,
        scheduler,
        transcriber,
        engine,
        emission_interval_seconds=60,
        listen_again_delay_seconds=0,
    )
