"""FastAPI application entry point."""

from contextlib import asynccontextmanager

import uvicorn
from ddtrace import patch_all
from fastapi import FastAPI

from bolly_beat.dependencies import get_controller, get_http_client, get_song_identifier
from bolly_beat.logging import setup_logging
from bolly_beat.routes import feed_router, session_router, songs_router

logger = setup_logging()
patch_all()


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.controller = get_controller()
    app.state.song_identifier = get_song_identifier()
    logger.info("Starting bolly-beat service")
    yield
    await app.state.controller.shutdown()
    await get_http_client().aclose()
    logger.info("bolly-beat service stopped")


app = FastAPI(title="Song to Bolly Beat", lifespan=lifespan)
app.include_router(session_router)
app.include_router(feed_router)
app.include_router(songs_router)


def main():
    """Runs the API server."""
    uvicorn.run(app, host="0.0.0.0", port=8000, log_config=None)


if __name__ == "__main__":
    main()
