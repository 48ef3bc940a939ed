"""Shazam-compatible recognize server implementation of RecognitionService."""

from typing import Any

import httpx

from bolly_beat.domain.models import AudioSample, RecognizedTrack
from bolly_beat.exceptions import (
    RecognitionTransportError,
    RecognitionUnconfiguredError,
)
from bolly_beat.logging import setup_logging

from .interfaces import RecognitionService

logger = setup_logging()

_EXTENSIONS = {
    "audio/wav": "wav",
    "audio/webm": "webm",
    "audio/ogg": "ogg",
    "audio/mpeg": "mp3",
}


class ShazamRecognitionClient(RecognitionService):
    """Uploads samples to a recognize server as multipart field ``audio``."""

    def __init__(self, client: httpx.AsyncClient, api_url: str):
        self._client = client
        self._api_url = api_url

    async def identify(self, sample: AudioSample) -> RecognizedTrack | None:
        """
        Sends the sample to ``{api_url}/api/recognize``.

        A 2xx answer without matches (or with ``success: false``) is a
        no-match, not a failure.
        """
        if not self._api_url.strip():
            raise RecognitionUnconfiguredError("RECOGNIZE_API_URL")

        endpoint = f"{self._api_url.rstrip('/')}/api/recognize"
        extension = _EXTENSIONS.get(sample.encoding, "webm")
        files = {"audio": (f"recording.{extension}", sample.data, sample.encoding)}

        try:
            response = await self._client.post(endpoint, files=files)
        except httpx.HTTPError as e:
            logger.exception("Recognition request failed", extra={"endpoint": endpoint})
            raise RecognitionTransportError(f"Recognition request failed: {e}", e) from e

        try:
            payload = response.json()
        except ValueError as e:
            raise RecognitionTransportError(
                f"Invalid response from recognize server (status {response.status_code})",
                e,
            ) from e

        if response.is_error:
            message = payload.get("error") if isinstance(payload, dict) else None
            raise RecognitionTransportError(
                message or f"Server error {response.status_code}"
            )

        try:
            track = _first_track(payload)
            recognized = RecognizedTrack.from_shazam(track) if track else None
        except ValueError as e:
            logger.error("Malformed recognition response", extra={"error": str(e)})
            raise RecognitionTransportError(
                f"Malformed response from recognize server: {e}", e
            ) from e

        if recognized is None:
            logger.info("No song match", extra={"sample_bytes": sample.size})
            return None

        logger.info(
            "Song recognized",
            extra={"track_key": recognized.key, "title": recognized.title},
        )
        return recognized


def _first_track(payload: Any) -> dict[str, Any] | None:
    """Extracts the best match from the known response shapes."""
    if not isinstance(payload, dict):
        raise ValueError("response is not an object")
    if payload.get("success") is False:
        return None

    body = payload.get("data") or payload
    if not isinstance(body, dict):
        raise ValueError("data is not an object")

    matches = body.get("matches") or []
    if not isinstance(matches, list):
        raise ValueError("matches is not a list")
    if matches:
        if not isinstance(matches[0], dict):
            raise ValueError("match is not an object")
        track = matches[0].get("track")
    else:
        track = body.get("track")

    if track is not None and not isinstance(track, dict):
        raise ValueError("track is not an object")
    return track
