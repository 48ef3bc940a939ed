"""Application configuration loaded from environment variables."""

import os
from pathlib import Path

from pydantic import BaseModel, computed_field


class CaptureConfig(BaseModel, frozen=True):
    """Microphone capture configuration."""

    sample_rate: int = 16000
    channels: int = 1
    max_duration_seconds: float = 5.0
    min_sample_bytes: int = 1000


class RecognitionConfig(BaseModel, frozen=True):
    """Song recognition service configuration."""

    api_url: str
    timeout_seconds: float = 30.0


class SchedulerConfig(BaseModel, frozen=True):
    """Recognition scheduling configuration."""

    interval_seconds: float = 5.0
    warmup_seconds: float = 1.0


class TranscriptionConfig(BaseModel, frozen=True):
    """Continuous speech transcription configuration."""

    api_key: str
    language: str = "en-US"
    emission_interval_seconds: float = 3.0
    restart_delay_seconds: float = 0.1
    sample_rate: int = 16000


class SearchConfig(BaseModel, frozen=True):
    """Video search configuration."""

    youtube_api_key: str
    proxy_url: str = ""
    keyword: str = "dance"
    max_results: int = 10
    duration_hint: str = "short"
    timeout_seconds: float = 15.0
    fallback_enabled: bool = True


class QueueConfig(BaseModel, frozen=True):
    """Video queue timing and window configuration."""

    swap_mount_delay_seconds: float = 0.3
    swap_cleanup_delay_seconds: float = 0.5
    trim_delay_seconds: float = 0.1
    lookahead: int = 5
    history: int = 10


class GeminiConfig(BaseModel, frozen=True):
    """Gemini LLM configuration."""

    api_key: str
    model_name: str = "gemini-2.5-flash"
    system_prompt_path: Path = Path("prompts/identify_song.txt")


class DatabaseConfig(BaseModel, frozen=True):
    """Song metadata cache database configuration."""

    host: str
    port: str
    user: str
    password: str
    database: str
    use_sqlite: bool = False

    @computed_field
    @property
    def url(self) -> str:
        """Returns the SQLAlchemy connection URL."""
        if self.use_sqlite:
            return "sqlite:///./bolly_beat.db"
        return (
            f"postgresql+psycopg://{self.user}:{self.password}"
            f"@{self.host}:{self.port}/{self.database}"
        )


class LoggingConfig(BaseModel, frozen=True):
    """Log level and the logger name every module logs under."""

    level: str = "INFO"
    service_name: str = "bolly-beat"


class AppConfig(BaseModel, frozen=True):
    """Root application configuration."""

    logging: LoggingConfig
    capture: CaptureConfig
    recognition: RecognitionConfig
    scheduler: SchedulerConfig
    transcription: TranscriptionConfig
    search: SearchConfig
    queue: QueueConfig
    gemini: GeminiConfig
    database: DatabaseConfig


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


def load_logging_config() -> LoggingConfig:
    return LoggingConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        service_name=os.getenv("SERVICE_NAME", "bolly-beat"),
    )


def load_config() -> AppConfig:
    """Loads configuration from environment variables."""
    return AppConfig(
        logging=load_logging_config(),
        capture=CaptureConfig(
            sample_rate=int(os.getenv("CAPTURE_SAMPLE_RATE", "16000")),
            max_duration_seconds=float(os.getenv("CAPTURE_DURATION_SECONDS", "5")),
            min_sample_bytes=int(os.getenv("CAPTURE_MIN_SAMPLE_BYTES", "1000")),
        ),
        recognition=RecognitionConfig(
            api_url=os.getenv("RECOGNIZE_API_URL", ""),
        ),
        scheduler=SchedulerConfig(
            interval_seconds=float(os.getenv("RECOGNITION_INTERVAL_SECONDS", "5")),
            warmup_seconds=float(os.getenv("RECOGNITION_WARMUP_SECONDS", "1")),
        ),
        transcription=TranscriptionConfig(
            api_key=os.getenv("ASSEMBLYAI_API_KEY", ""),
            language=os.getenv("TRANSCRIPTION_LANGUAGE", "en-US"),
            emission_interval_seconds=float(
                os.getenv("TRANSCRIPT_EMISSION_SECONDS", "3")
            ),
        ),
        search=SearchConfig(
            youtube_api_key=os.getenv("YOUTUBE_API_KEY", ""),
            proxy_url=os.getenv("VIDEO_SEARCH_PROXY_URL", ""),
            keyword=os.getenv("VIDEO_SEARCH_KEYWORD", "dance"),
            max_results=int(os.getenv("VIDEO_SEARCH_MAX_RESULTS", "10")),
            fallback_enabled=_flag("VIDEO_SEARCH_FALLBACK", "true"),
        ),
        queue=QueueConfig(
            lookahead=int(os.getenv("QUEUE_LOOKAHEAD", "5")),
            history=int(os.getenv("QUEUE_HISTORY", "10")),
        ),
        gemini=GeminiConfig(
            api_key=os.getenv("GEMINI_API_KEY", ""),
            model_name=os.getenv("GEMINI_MODEL_NAME", "gemini-2.5-flash"),
        ),
        database=DatabaseConfig(
            host=os.getenv("POSTGRES_HOST", "postgres"),
            port=os.getenv("POSTGRES_PORT", "5432"),
            user=os.getenv("POSTGRES_USER", ""),
            password=os.getenv("POSTGRES_PASSWORD", ""),
            database=os.getenv("POSTGRES_DB", "bolly_beat"),
            use_sqlite=_flag("USE_SQLITE", "false"),
        ),
    )
