"""Periodic capture -> recognize loop with rate limiting and track dedup."""

import asyncio
import inspect
import time
from enum import Enum
from typing import Awaitable, Callable

from pydantic import BaseModel

from bolly_beat.domain.models import RecognizedTrack
from bolly_beat.exceptions import (
    AudioTooShortError,
    CaptureBusyError,
    CaptureError,
    MicrophonePermissionError,
    RecognitionTransportError,
    RecognitionUnconfiguredError,
)
from bolly_beat.infrastructure.interfaces import AudioCapture, RecognitionService
from bolly_beat.logging import setup_logging

logger = setup_logging()

TrackCallback = Callable[[RecognizedTrack], Awaitable[None] | None]
PermissionCallback = Callable[[MicrophonePermissionError], Awaitable[None] | None]


class SchedulerPhase(str, Enum):
    IDLE = "idle"
    WAITING = "waiting"
    IN_FLIGHT = "in_flight"


class TickOutcome(str, Enum):
    SKIPPED = "skipped"
    DEFERRED = "deferred"
    IDENTIFIED = "identified"
    DUPLICATE = "duplicate"
    NO_MATCH = "no_match"
    NO_SIGNAL = "no_signal"
    FAILED = "failed"
    PERMISSION_DENIED = "permission_denied"
    UNCONFIGURED = "unconfigured"
    CANCELLED = "cancelled"


class SchedulerState(BaseModel):
    last_call_at: float | None = None
    last_seen_track_key: str | None = None
    phase: SchedulerPhase = SchedulerPhase.IDLE
    enabled: bool = True
    last_error: str | None = None


class RecognitionScheduler:
    """
    Drives capture and recognition on a fixed interval.

    At most one cycle runs at a time, recognition calls are at least
    ``interval_seconds`` apart, and a song is reported once per run of
    identical matches.
    """

    def __init__(
        self,
        capture: AudioCapture,
        recognizer: RecognitionService,
        interval_seconds: float = 5.0,
        warmup_seconds: float = 1.0,
        capture_seconds: float = 5.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._capture = capture
        self._recognizer = recognizer
        self._interval = interval_seconds
        self._warmup = warmup_seconds
        self._capture_seconds = capture_seconds
        self._clock = clock

        self.state = SchedulerState()
        self._generation = 0
        self._on_identified: TrackCallback | None = None
        self._on_permission_denied: PermissionCallback | None = None
        self._loop_task: asyncio.Task | None = None
        self._deferred_task: asyncio.Task | None = None
        self._ticks: set[asyncio.Task] = set()

    @property
    def is_running(self) -> bool:
        return self._loop_task is not None

    def start(
        self,
        on_identified: TrackCallback,
        on_permission_denied: PermissionCallback | None = None,
    ) -> None:
        """
        Begins ticking after the warm-up delay. Must be called on the event loop.

        Args:
            on_identified: Called once for each newly recognized song.
            on_permission_denied: Called when the microphone is refused
                mid-session; the scheduler disables itself first.
        """
        if self._loop_task is not None:
            return

        self._generation += 1
        self._on_identified = on_identified
        self._on_permission_denied = on_permission_denied
        self._loop_task = asyncio.create_task(self._run())
        logger.info(
            "Recognition scheduler started",
            extra={"interval_seconds": self._interval, "warmup_seconds": self._warmup},
        )

    def stop(self) -> None:
        """Cancels ticking and any deferred or in-flight cycle; late results are dropped."""
        self._generation += 1
        if self._loop_task is not None:
            self._loop_task.cancel()
            self._loop_task = None
        self._cancel_deferred()
        self._capture.stop_capture()
        self.state.phase = SchedulerPhase.IDLE
        self._on_identified = None
        self._on_permission_denied = None
        logger.info("Recognition scheduler stopped")

    def set_enabled(self, enabled: bool) -> None:
        self.state.enabled = enabled
        if not enabled:
            self._cancel_deferred()
            self._capture.stop_capture()

    async def _run(self) -> None:
        await asyncio.sleep(self._warmup)
        while True:
            task = asyncio.create_task(self.tick())
            self._ticks.add(task)
            task.add_done_callback(self._ticks.discard)
            await asyncio.sleep(self._interval)

    async def tick(self) -> TickOutcome:
        """
        Runs one scheduling step.

        Returns:
            What the step did; ticks that find a cycle already running or
            waiting are skipped, not queued.
        """
        if not self.state.enabled or self.state.phase != SchedulerPhase.IDLE:
            return TickOutcome.SKIPPED

        generation = self._generation
        if self.state.last_call_at is not None:
            remaining = self._interval - (self._clock() - self.state.last_call_at)
            if remaining > 0:
                self.state.phase = SchedulerPhase.WAITING
                self._deferred_task = asyncio.create_task(
                    self._deferred_cycle(generation, remaining)
                )
                return TickOutcome.DEFERRED

        return await self._cycle(generation)

    async def _deferred_cycle(self, generation: int, delay: float) -> TickOutcome:
        # A cancelled task must not clear a newer deferred task's state.
        try:
            await asyncio.sleep(delay)
        finally:
            is_current = self._deferred_task is asyncio.current_task()
            if is_current:
                self._deferred_task = None

        if not is_current or generation != self._generation:
            return TickOutcome.CANCELLED
        if not self.state.enabled or self.state.phase != SchedulerPhase.WAITING:
            if self.state.phase == SchedulerPhase.WAITING:
                self.state.phase = SchedulerPhase.IDLE
            return TickOutcome.SKIPPED
        return await self._cycle(generation)

    async def _cycle(self, generation: int) -> TickOutcome:
        self.state.phase = SchedulerPhase.IN_FLIGHT
        try:
            return await self._capture_and_recognize(generation)
        finally:
            if generation == self._generation:
                self.state.phase = SchedulerPhase.IDLE

    async def _capture_and_recognize(self, generation: int) -> TickOutcome:
        try:
            sample = await self._capture.capture(self._capture_seconds)
        except AudioTooShortError as e:
            logger.debug("No usable audio captured", extra={"size_bytes": e.size_bytes})
            return TickOutcome.NO_SIGNAL
        except CaptureBusyError:
            return TickOutcome.SKIPPED
        except MicrophonePermissionError as e:
            logger.error("Microphone access lost, disabling recognition")
            self.state.last_error = str(e)
            self.state.enabled = False
            await self._invoke(self._on_permission_denied, e)
            return TickOutcome.PERMISSION_DENIED
        except CaptureError as e:
            logger.error("Audio capture failed", extra={"error": str(e)})
            self.state.last_error = str(e)
            return TickOutcome.FAILED

        if generation != self._generation or not self.state.enabled:
            return TickOutcome.CANCELLED

        self.state.last_call_at = self._clock()
        try:
            track = await self._recognizer.identify(sample)
        except RecognitionUnconfiguredError as e:
            logger.error("Recognition is not configured, disabling", extra={"setting": e.setting})
            self.state.last_error = str(e)
            self.state.enabled = False
            return TickOutcome.UNCONFIGURED
        except RecognitionTransportError as e:
            logger.warning("Recognition failed", extra={"error": str(e)})
            if generation == self._generation:
                self.state.last_error = str(e)
            return TickOutcome.FAILED

        if generation != self._generation:
            return TickOutcome.CANCELLED
        if track is None:
            return TickOutcome.NO_MATCH
        if track.key == self.state.last_seen_track_key:
            logger.debug("Same song still playing", extra={"track_key": track.key})
            return TickOutcome.DUPLICATE

        self.state.last_seen_track_key = track.key
        self.state.last_error = None
        await self._invoke(self._on_identified, track)
        return TickOutcome.IDENTIFIED

    async def _invoke(self, callback: Callable | None, argument) -> None:
        if callback is None:
            return
        try:
            result = callback(argument)
            if inspect.isawaitable(result):
                await result
        except Exception:
            logger.exception(
                "Scheduler callback failed", extra={"argument": type(argument).__name__}
            )

    def _cancel_deferred(self) -> None:
        if self._deferred_task is not None:
            self._deferred_task.cancel()
            self._deferred_task = None
            self.state.phase = SchedulerPhase.IDLE
