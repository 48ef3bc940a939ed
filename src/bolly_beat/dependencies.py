"""Dependency injection configuration for the bolly-beat service."""

from contextlib import contextmanager
from pathlib import Path

import httpx
from google import genai
from sqlmodel import Session, SQLModel, create_engine

from bolly_beat.config import load_config
from bolly_beat.domain.queue_engine import VideoQueueEngine
from bolly_beat.domain.recognition_scheduler import RecognitionScheduler
from bolly_beat.domain.song_identifier import SongIdentifier
from bolly_beat.domain.transcription import ContinuousTranscriber
from bolly_beat.domain.video_search import VideoSearchClient
from bolly_beat.handlers import SessionController
from bolly_beat.infrastructure.assemblyai_speech import AssemblyAISpeechStream
from bolly_beat.infrastructure.gemini_llm import GeminiLLMService
from bolly_beat.infrastructure.shazam_recognizer import ShazamRecognitionClient
from bolly_beat.infrastructure.sounddevice_capture import SoundDeviceCapture
from bolly_beat.infrastructure.youtube_index import SearchProxyIndex, YouTubeDataApiIndex
from bolly_beat.logging import setup_logging
from bolly_beat.repositories import SongHookstepRepository

_config = load_config()

logger = setup_logging(_config.logging)

# Shared HTTP client for recognition and video search
_http_client = httpx.AsyncClient(timeout=_config.recognition.timeout_seconds)

# Microphone and song recognition
_capture = SoundDeviceCapture(
    sample_rate=_config.capture.sample_rate,
    channels=_config.capture.channels,
    min_sample_bytes=_config.capture.min_sample_bytes,
)
_recognizer = ShazamRecognitionClient(_http_client, _config.recognition.api_url)
_scheduler = RecognitionScheduler(
    _capture,
    _recognizer,
    interval_seconds=_config.scheduler.interval_seconds,
    warmup_seconds=_config.scheduler.warmup_seconds,
    capture_seconds=_config.capture.max_duration_seconds,
)

# Continuous transcription
_speech_stream = AssemblyAISpeechStream(
    api_key=_config.transcription.api_key,
    sample_rate=_config.transcription.sample_rate,
)
_transcriber = ContinuousTranscriber(
    _speech_stream, _config.transcription.restart_delay_seconds
)

# Video search, proxy when configured
if _config.search.proxy_url:
    _video_index = SearchProxyIndex(
        _http_client, _config.search.proxy_url, _config.search.timeout_seconds
    )
else:
    _video_index = YouTubeDataApiIndex(
        _http_client, _config.search.youtube_api_key, _config.search.timeout_seconds
    )
_search_client = VideoSearchClient(
    _video_index,
    keyword=_config.search.keyword,
    fallback_enabled=_config.search.fallback_enabled,
)
_queue_engine = VideoQueueEngine(
    _search_client,
    max_results=_config.search.max_results,
    duration_hint=_config.search.duration_hint,
    swap_mount_delay_seconds=_config.queue.swap_mount_delay_seconds,
    swap_cleanup_delay_seconds=_config.queue.swap_cleanup_delay_seconds,
    trim_delay_seconds=_config.queue.trim_delay_seconds,
    lookahead=_config.queue.lookahead,
    history=_config.queue.history,
)

# Song metadata cache
_db_engine = create_engine(_config.database.url)
SQLModel.metadata.create_all(_db_engine)
logger.info("Database initialized", extra={"url": _config.database.url.split("@")[-1]})


@contextmanager
def _session_factory():
    """Creates a database session context manager."""
    with Session(_db_engine) as session:
        yield session


_repository = SongHookstepRepository(_session_factory)

# Gemini LLM
_gemini_client = genai.Client(api_key=_config.gemini.api_key)
_system_prompt_path = Path(__file__).parent / _config.gemini.system_prompt_path
_system_prompt = _system_prompt_path.read_text(encoding="utf-8")
_llm = GeminiLLMService(_gemini_client, _config.gemini.model_name, _system_prompt)

# Service composition
_song_identifier = SongIdentifier(_llm, _repository)
_controller = SessionController(
    _capture,
    _scheduler,
    _transcriber,
    _queue_engine,
    language=_config.transcription.language,
    emission_interval_seconds=_config.transcription.emission_interval_seconds,
)


def get_controller() -> SessionController:
    """Returns the configured session controller."""
    return _controller


def get_song_identifier() -> SongIdentifier:
    """Returns the configured song identifier."""
    return _song_identifier


def get_http_client() -> httpx.AsyncClient:
    return _http_client
