"""Infrastructure interface exports."""

from .audio_capture import AudioCapture
from .llm_service import LLMService
from .recognition_service import RecognitionService
from .song_cache import SongCache
from .speech_stream import SpeechListener, SpeechStream
from .video_index import VideoIndex

__all__ = [
    "AudioCapture",
    "LLMService",
    "RecognitionService",
    "SongCache",
    "SpeechListener",
    "SpeechStream",
    "VideoIndex",
]
