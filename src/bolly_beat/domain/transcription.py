"""Continuous speech transcription with periodic, deduplicated emission."""

import asyncio
import inspect
from typing import Awaitable, Callable

from pydantic import BaseModel

from bolly_beat.exceptions import SpeechStreamError, TranscriptionUnsupportedError
from bolly_beat.infrastructure.interfaces import SpeechStream
from bolly_beat.logging import setup_logging

logger = setup_logging()

BENIGN_ERRORS = frozenset({"no-speech", "aborted"})

EmitCallback = Callable[[str], Awaitable[None] | None]


class TranscriptBuffer(BaseModel):
    """Accumulates final speech segments between emissions."""

    accumulated_text: str = ""
    last_emitted_text: str = ""
    interim_text: str = ""

    def append_final(self, text: str) -> None:
        self.accumulated_text = f"{self.accumulated_text} {text.strip()}".strip()
        self.interim_text = ""

    def set_interim(self, text: str) -> None:
        self.interim_text = text

    def take_emission(self) -> str | None:
        """
        Returns the accumulated text if it is new, and clears the accumulator.

        Text equal to the last emission is held back and left in place.
        """
        text = self.accumulated_text.strip()
        if not text or text == self.last_emitted_text:
            return None
        self.last_emitted_text = text
        self.accumulated_text = ""
        return text

    def reset(self) -> None:
        self.accumulated_text = ""
        self.last_emitted_text = ""
        self.interim_text = ""


class ContinuousTranscriber:
    """
    Keeps a speech stream open and emits what was said every few seconds.

    Acts as the stream's listener; the stream ending on its own triggers a
    restart after a short delay while the transcriber is running.
    """

    def __init__(self, stream: SpeechStream, restart_delay_seconds: float = 0.1):
        self._stream = stream
        self._restart_delay = restart_delay_seconds
        self.buffer = TranscriptBuffer()
        self.last_error: str | None = None
        self.should_restart = False

        self._language = "en-US"
        self._generation = 0
        self._on_emit: EmitCallback | None = None
        self._emit_task: asyncio.Task | None = None
        self._restart_handle: asyncio.TimerHandle | None = None

    @property
    def is_supported(self) -> bool:
        return self._stream.is_supported

    @property
    def is_listening(self) -> bool:
        return self.should_restart

    def start(
        self, language: str, emission_interval_seconds: float, on_emit: EmitCallback
    ) -> None:
        """
        Opens the speech stream and starts the emission timer.

        Raises:
            TranscriptionUnsupportedError: If the backend is unavailable.
            SpeechStreamError: If the stream cannot be opened.
        """
        if not self.is_supported:
            raise TranscriptionUnsupportedError()
        if self.should_restart:
            return

        self._generation += 1
        self._language = language
        self._on_emit = on_emit
        self.buffer.reset()
        self.last_error = None

        self._stream.open(language, self)
        self.should_restart = True
        self._emit_task = asyncio.create_task(
            self._emit_periodically(self._generation, emission_interval_seconds)
        )
        logger.info("Continuous transcription started", extra={"language": language})

    def stop(self) -> None:
        self.should_restart = False
        self._generation += 1
        if self._emit_task is not None:
            self._emit_task.cancel()
            self._emit_task = None
        if self._restart_handle is not None:
            self._restart_handle.cancel()
            self._restart_handle = None
        self._stream.close()
        self.buffer.reset()
        self._on_emit = None
        logger.info("Continuous transcription stopped")

    def on_result(self, text: str, is_final: bool) -> None:
        if is_final:
            self.buffer.append_final(text)
        else:
            self.buffer.set_interim(text)

    def on_error(self, kind: str) -> None:
        if kind in BENIGN_ERRORS:
            logger.debug("Benign speech error", extra={"kind": kind})
            return
        logger.warning("Speech recognition error", extra={"kind": kind})
        self.last_error = kind

    def on_end(self) -> None:
        if not self.should_restart:
            return
        loop = asyncio.get_running_loop()
        self._restart_handle = loop.call_later(
            self._restart_delay, self._restart, self._generation
        )

    def _restart(self, generation: int) -> None:
        self._restart_handle = None
        if generation != self._generation or not self.should_restart:
            return
        try:
            self._stream.open(self._language, self)
            logger.debug("Speech stream restarted")
        except SpeechStreamError as e:
            logger.warning("Speech stream restart failed", extra={"kind": e.kind})
            self.last_error = e.kind

    async def _emit_periodically(self, generation: int, interval: float) -> None:
        while generation == self._generation:
            await asyncio.sleep(interval)
            await self.emit_now()

    async def emit_now(self) -> str | None:
        """Emits the accumulated text if it changed since the last emission."""
        text = self.buffer.take_emission()
        if text is None or self._on_emit is None:
            return None

        logger.info("Transcript emitted", extra={"text": text})
        try:
            result = self._on_emit(text)
            if inspect.isawaitable(result):
                await result
        except Exception:
            logger.exception("Transcript callback failed")
        return text
