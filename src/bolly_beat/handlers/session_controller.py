"""Top-level session state machine wiring listening to the video feed."""

import asyncio
import uuid

from bolly_beat.domain.models import AppState, QueueMode, QueueSnapshot, RecognizedTrack
from bolly_beat.domain.queue_engine import VideoQueueEngine
from bolly_beat.domain.recognition_scheduler import RecognitionScheduler
from bolly_beat.domain.transcription import ContinuousTranscriber
from bolly_beat.exceptions import (
    MicrophonePermissionError,
    SpeechStreamError,
    TranscriptionUnsupportedError,
)
from bolly_beat.infrastructure.interfaces import AudioCapture
from bolly_beat.logging import bind_session, bind_track, setup_logging
from bolly_beat.response_models import SessionSnapshot

logger = setup_logging()


class SessionController:
    """
    Owns the listening session: idle -> listening -> displaying feed, or error.

    Recognized songs and emitted transcripts both feed the queue in replace
    mode; the most recent query is remembered so a repeat is ignored.
    """

    def __init__(
        self,
        capture: AudioCapture,
        scheduler: RecognitionScheduler,
        transcriber: ContinuousTranscriber,
        queue_engine: VideoQueueEngine,
        language: str = "en-US",
        emission_interval_seconds: float = 3.0,
        listen_again_delay_seconds: float = 0.1,
    ):
        self._capture = capture
        self._scheduler = scheduler
        self._transcriber = transcriber
        self._queue = queue_engine
        self._language = language
        self._emission_interval = emission_interval_seconds
        self._listen_again_delay = listen_again_delay_seconds

        self.state = AppState.IDLE
        self.session_id: str | None = None
        self.has_permission = False
        self.current_track: RecognizedTrack | None = None
        self.latest_query: str | None = None
        self._errors: dict[str, str] = {}

    @property
    def is_listening(self) -> bool:
        return self.state in (AppState.LISTENING, AppState.DISPLAYING_FEED)

    async def start(self) -> SessionSnapshot:
        """
        Checks microphone access and starts recognition and transcription.

        A refused microphone puts the session in the error state; there is
        no retry until the user starts again.
        """
        if self.is_listening:
            return self.snapshot()

        try:
            await self._capture.check_permission()
        except MicrophonePermissionError as e:
            logger.warning("Microphone permission denied")
            self.has_permission = False
            self.state = AppState.ERROR
            self._errors["microphone"] = str(e)
            return self.snapshot()

        self.has_permission = True
        self._errors.pop("microphone", None)
        self.session_id = uuid.uuid4().hex
        bind_session(self.session_id)
        self.state = AppState.DISPLAYING_FEED if not self._queue.is_empty else AppState.LISTENING

        self._scheduler.set_enabled(True)
        self._scheduler.start(self.handle_track, self.handle_permission_lost)
        self._start_transcription()

        logger.info("Listening session started")
        return self.snapshot()

    def _start_transcription(self) -> None:
        try:
            self._transcriber.start(
                self._language, self._emission_interval, self.handle_transcript
            )
        except TranscriptionUnsupportedError:
            logger.info("Transcription unavailable, continuing with song recognition only")
        except SpeechStreamError as e:
            logger.warning("Transcription failed to start", extra={"kind": e.kind})
            self._errors["transcription"] = e.kind

    async def stop(self) -> SessionSnapshot:
        """Stops listening; the feed stays as it is."""
        self._scheduler.stop()
        self._transcriber.stop()
        if self.state != AppState.ERROR:
            self.state = AppState.IDLE if self._queue.is_empty else AppState.DISPLAYING_FEED
        logger.info("Listening session stopped")
        return self.snapshot()

    async def listen_again(self) -> SessionSnapshot:
        """Clears the feed and the current song, then starts a fresh session."""
        await self.stop()
        await self._queue.clear()
        self.current_track = None
        self.latest_query = None
        self._errors.clear()
        self.state = AppState.IDLE
        await asyncio.sleep(self._listen_again_delay)
        return await self.start()

    async def shutdown(self) -> None:
        await self.stop()
        await self._queue.clear()
        await self._queue.wait_for_transitions()

    async def handle_track(self, track: RecognizedTrack) -> None:
        logger.info(
            "Song identified",
            extra={"track_key": track.key, "title": track.title, "artist": track.artist},
        )
        self.current_track = track
        bind_track(track.key)
        await self._request_videos(track.search_query, key=track.key)

    async def handle_permission_lost(self, error: MicrophonePermissionError) -> None:
        """Ends the session when the microphone is refused after it started."""
        logger.warning("Microphone access lost, ending session")
        self._scheduler.stop()
        self._transcriber.stop()
        self.has_permission = False
        self.state = AppState.ERROR
        self._errors["microphone"] = str(error)

    async def handle_transcript(self, text: str) -> None:
        await self._request_videos(text)

    async def _request_videos(self, query: str, key: str | None = None) -> None:
        normalized = query.strip().lower()
        if not normalized or normalized == self.latest_query:
            return
        self.latest_query = normalized

        await self._queue.enqueue(query, QueueMode.REPLACE, key=key)
        if self.state == AppState.LISTENING and not self._queue.is_empty:
            self.state = AppState.DISPLAYING_FEED

    async def go_to_next(self) -> QueueSnapshot:
        await self._queue.go_to_next()
        return self._queue.snapshot()

    async def go_to_previous(self) -> QueueSnapshot:
        await self._queue.go_to_previous()
        return self._queue.snapshot()

    def errors(self) -> dict[str, str]:
        """Latest error per subsystem."""
        errors = dict(self._errors)
        if self._scheduler.state.last_error:
            errors["recognition"] = self._scheduler.state.last_error
        if self._transcriber.last_error:
            errors["transcription"] = self._transcriber.last_error
        if self._queue.error:
            errors["search"] = self._queue.error
        return errors

    def snapshot(self) -> SessionSnapshot:
        queue = self._queue.snapshot()
        return SessionSnapshot(
            state=self.state,
            session_id=self.session_id,
            has_permission=self.has_permission,
            transcription_supported=self._transcriber.is_supported,
            is_listening=self.is_listening,
            current_track=self.current_track,
            transcript_preview=self._transcriber.buffer.interim_text
            or self._transcriber.buffer.accumulated_text,
            latest_query=self.latest_query,
            errors=self.errors(),
            queue=queue,
        )
