import contextvars
import logging
import sys

from pythonjsonlogger import jsonlogger

from bolly_beat.config import LoggingConfig, load_logging_config

LOG_FORMAT = (
    "%(asctime)s %(levelname)s %(name)s %(message)s "
    "%(session_id)s %(track_key)s %(trace_id)s %(span_id)s"
)

session_id_var: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "session_id", default=None
)
track_key_var: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "track_key", default=None
)

_handler: logging.Handler | None = None


class ListeningContextFilter(logging.Filter):
    """Stamps records with the listening session and the song being played."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.session_id = session_id_var.get()
        # An explicit track_key passed through ``extra`` wins.
        if getattr(record, "track_key", None) is None:
            record.track_key = track_key_var.get()
        return True


def bind_session(session_id: str | None) -> None:
    """Tags logs from the current task, and tasks it creates, with a session id."""
    session_id_var.set(session_id)
    track_key_var.set(None)


def bind_track(track_key: str | None) -> None:
    track_key_var.set(track_key)


def _build_handler() -> logging.Handler:
    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(jsonlogger.JsonFormatter(LOG_FORMAT))
    stream_handler.addFilter(ListeningContextFilter())
    return stream_handler


def setup_logging(config: LoggingConfig | None = None) -> logging.Logger:
    """
    Configures structured JSON logging for the service.

    Records carry timestamp, level, logger name, message, the listening
    session and song (when bound), plus trace_id and span_id. The root and
    Uvicorn loggers share one stdout handler, installed on the first call.

    Args:
        config: Level and logger name; read from the environment when omitted.

    Returns:
        logging.Logger: The service logger.
    """
    global _handler

    config = config or load_logging_config()
    if _handler is None:
        _handler = _build_handler()

    root_logger = logging.getLogger()
    root_logger.setLevel(config.level)
    if _handler not in root_logger.handlers:
        root_logger.handlers = [_handler]

    for logger_name in ["uvicorn", "uvicorn.access", "uvicorn.error"]:
        u_logger = logging.getLogger(logger_name)
        u_logger.setLevel(config.level)
        u_logger.handlers = [_handler]
        u_logger.propagate = False

    return logging.getLogger(config.service_name)
