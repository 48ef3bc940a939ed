"""Microphone capture using PortAudio through sounddevice."""

import asyncio
import io
import time
import wave

import numpy as np
import sounddevice as sd

from bolly_beat.domain.models import AudioSample
from bolly_beat.exceptions import MicrophonePermissionError
from bolly_beat.logging import setup_logging

from .interfaces import AudioCapture

logger = setup_logging()


class SoundDeviceCapture(AudioCapture):
    """Records 16-bit mono PCM from the default input device into WAV samples."""

    def __init__(self, sample_rate: int, channels: int, min_sample_bytes: int):
        super().__init__(min_sample_bytes)
        self._sample_rate = sample_rate
        self._channels = channels

    async def check_permission(self) -> None:
        try:
            await asyncio.to_thread(
                sd.check_input_settings,
                samplerate=self._sample_rate,
                channels=self._channels,
                dtype="int16",
            )
        except (sd.PortAudioError, ValueError) as e:
            logger.warning("Microphone unavailable", extra={"error": str(e)})
            raise MicrophonePermissionError(cause=e) from e

    async def _record(
        self, max_duration_seconds: float, stop_requested: asyncio.Event
    ) -> AudioSample:
        frames: list[np.ndarray] = []

        def _on_audio(indata, frame_count, time_info, status):
            if status:
                logger.warning("Input stream status", extra={"status": str(status)})
            frames.append(indata.copy())

        try:
            stream = sd.InputStream(
                samplerate=self._sample_rate,
                channels=self._channels,
                dtype="int16",
                callback=_on_audio,
            )
        except sd.PortAudioError as e:
            logger.exception("Failed to open input stream")
            raise MicrophonePermissionError(cause=e) from e

        started = time.monotonic()
        with stream:
            try:
                await asyncio.wait_for(stop_requested.wait(), timeout=max_duration_seconds)
            except asyncio.TimeoutError:
                pass
        duration = time.monotonic() - started

        pcm = np.concatenate(frames).tobytes() if frames else b""
        logger.info(
            "Audio captured",
            extra={"bytes": len(pcm), "duration_seconds": round(duration, 2)},
        )
        return AudioSample(
            data=self._to_wav(pcm), encoding="audio/wav", duration_seconds=duration
        )

    def _to_wav(self, pcm: bytes) -> bytes:
        """Wraps raw PCM frames in a WAV container."""
        buffer = io.BytesIO()
        with wave.open(buffer, "wb") as wav:
            wav.setnchannels(self._channels)
            wav.setsampwidth(2)
            wav.setframerate(self._sample_rate)
            wav.writeframes(pcm)
        return buffer.getvalue()
