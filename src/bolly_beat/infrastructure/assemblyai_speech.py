"""AssemblyAI streaming implementation of the SpeechStream interface."""

import asyncio
import threading
from typing import Callable, Iterator

import sounddevice as sd
from assemblyai.streaming.v3 import (
    StreamingClient,
    StreamingClientOptions,
    StreamingError,
    StreamingEvents,
    StreamingParameters,
    TurnEvent,
)

from bolly_beat.logging import setup_logging

from .interfaces import SpeechListener, SpeechStream

logger = setup_logging()


class AssemblyAISpeechStream(SpeechStream):
    """
    Streams microphone PCM to AssemblyAI and reports turns to a listener.

    The SDK blocks while streaming and fires callbacks on its own threads,
    so each session runs on a worker thread and every listener call is
    handed back to the event loop.
    """

    def __init__(
        self,
        api_key: str,
        sample_rate: int = 16000,
        block_size: int = 1600,
        api_host: str = "streaming.assemblyai.com",
    ):
        self._api_key = api_key
        self._sample_rate = sample_rate
        self._block_size = block_size
        self._api_host = api_host
        self._stop_event: threading.Event | None = None

    @property
    def is_supported(self) -> bool:
        return bool(self._api_key)

    def open(self, language: str, listener: SpeechListener) -> None:
        loop = asyncio.get_running_loop()
        stop_event = threading.Event()
        self._stop_event = stop_event

        worker = threading.Thread(
            target=self._run,
            args=(listener, loop, stop_event),
            name="assemblyai-speech",
            daemon=True,
        )
        worker.start()
        logger.info("Speech stream opened", extra={"language": language})

    def close(self) -> None:
        if self._stop_event is not None:
            self._stop_event.set()
            self._stop_event = None
            logger.info("Speech stream closed")

    def _run(
        self,
        listener: SpeechListener,
        loop: asyncio.AbstractEventLoop,
        stop_event: threading.Event,
    ) -> None:
        """Owns one streaming session from connect to disconnect."""

        def dispatch(callback: Callable[..., None], *args) -> None:
            if not loop.is_closed():
                loop.call_soon_threadsafe(callback, *args)

        def on_turn(_client: StreamingClient, event: TurnEvent) -> None:
            is_final = event.end_of_turn and event.turn_is_formatted
            if event.transcript:
                dispatch(listener.on_result, event.transcript, is_final)

        def on_error(_client: StreamingClient, error: StreamingError) -> None:
            logger.warning("Speech stream error", extra={"error": str(error)})
            dispatch(listener.on_error, "network")

        client = StreamingClient(
            StreamingClientOptions(api_key=self._api_key, api_host=self._api_host)
        )
        client.on(StreamingEvents.Turn, on_turn)
        client.on(StreamingEvents.Error, on_error)

        try:
            client.connect(
                StreamingParameters(sample_rate=self._sample_rate, format_turns=True)
            )
            client.stream(self._microphone_chunks(stop_event))
        except sd.PortAudioError:
            logger.exception("Microphone unavailable for speech stream")
            dispatch(listener.on_error, "audio-capture")
        except Exception:
            logger.exception("Speech stream failed")
            dispatch(listener.on_error, "network")
        finally:
            client.disconnect(terminate=True)
            if not stop_event.is_set():
                dispatch(listener.on_end)

    def _microphone_chunks(self, stop_event: threading.Event) -> Iterator[bytes]:
        """Yields raw 16-bit PCM blocks until the session is closed."""
        with sd.RawInputStream(
            samplerate=self._sample_rate,
            channels=1,
            dtype="int16",
            blocksize=self._block_size,
        ) as stream:
            while not stop_event.is_set():
                data, _overflowed = stream.read(self._block_size)
                yield bytes(data)
