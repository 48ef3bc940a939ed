"""Custom exceptions for the song-to-bolly-beat service."""


class CaptureError(Exception):
    """Base class for microphone capture failures."""

    def __init__(self, message: str, cause: Exception | None = None):
        self.cause = cause
        super().__init__(message)


class MicrophonePermissionError(CaptureError):
    """Raised when the microphone cannot be opened or access is refused."""

    def __init__(self, cause: Exception | None = None):
        super().__init__("Microphone access denied or unavailable", cause)


class AudioTooShortError(CaptureError):
    """Raised when a capture holds too little audio to be recognized."""

    def __init__(self, size_bytes: int, min_bytes: int):
        self.size_bytes = size_bytes
        self.min_bytes = min_bytes
        super().__init__(
            f"Captured sample of {size_bytes} bytes is below the {min_bytes} byte minimum"
        )


class CaptureBusyError(CaptureError):
    """Raised when a capture is requested while another one is active."""

    def __init__(self):
        super().__init__("A capture session is already active")


class RecognitionUnconfiguredError(Exception):
    """Raised when the recognition service endpoint is not configured."""

    def __init__(self, setting: str):
        self.setting = setting
        super().__init__(f"Recognition service is not configured ({setting} is empty)")


class RecognitionTransportError(Exception):
    """Raised when the recognition service cannot be reached or answers badly."""

    def __init__(self, message: str, cause: Exception | None = None):
        self.cause = cause
        super().__init__(message)


class TranscriptionUnsupportedError(Exception):
    """Raised when no speech recognition backend is available."""

    def __init__(self):
        super().__init__("Speech recognition is not supported in this environment")


class SpeechStreamError(Exception):
    """Raised when the streaming speech backend reports a failure."""

    def __init__(self, kind: str, cause: Exception | None = None):
        self.kind = kind
        self.cause = cause
        super().__init__(f"Speech recognition error: {kind}")


class InvalidQueryError(Exception):
    """Raised when a video search query is empty after trimming."""

    def __init__(self):
        super().__init__("Search query is required")


class VideoSearchUnconfiguredError(Exception):
    """Raised when no video index credentials or endpoint are configured."""

    def __init__(self, setting: str):
        self.setting = setting
        super().__init__(f"Video search is not configured ({setting} is empty)")


class VideoSearchTransportError(Exception):
    """Raised when the video index cannot be reached or answers badly."""

    def __init__(self, query: str, cause: Exception | None = None):
        self.query = query
        self.cause = cause
        super().__init__(f"Video search failed for query '{query}'")


class LLMServiceError(Exception):
    """Raised when LLM service call fails."""

    def __init__(self, message: str, cause: Exception | None = None):
        self.cause = cause
        super().__init__(message)


class SongNotIdentifiedError(Exception):
    """Raised when neither the cache nor the LLM can identify a song."""

    def __init__(self, query: str, reason: str | None = None):
        self.query = query
        self.reason = reason
        super().__init__(reason or f"Could not identify the song for '{query}'")


class SongCacheError(Exception):
    """Raised when song metadata cache operations fail."""

    def __init__(self, key: str, operation: str, cause: Exception | None = None):
        self.key = key
        self.operation = operation
        self.cause = cause
        super().__init__(f"Cache {operation} failed for key '{key}'")
