"""Listening session endpoints."""

from fastapi import APIRouter, HTTPException

from bolly_beat.logging import setup_logging
from bolly_beat.response_models import SessionSnapshot
from bolly_beat.routes.dependencies import ControllerDep

logger = setup_logging()

router = APIRouter(prefix="/session", tags=["session"])


@router.get("", response_model=SessionSnapshot)
def get_session(controller: ControllerDep):
    """Returns the current session and feed state."""
    return controller.snapshot()


@router.post("/start", response_model=SessionSnapshot)
async def start_session(controller: ControllerDep):
    """Starts listening; a denied microphone is reported in the snapshot state."""
    try:
        return await controller.start()
    except Exception as e:
        logger.error(f"Error starting session: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/stop", response_model=SessionSnapshot)
async def stop_session(controller: ControllerDep):
    """Stops listening and keeps the feed."""
    try:
        return await controller.stop()
    except Exception as e:
        logger.error(f"Error stopping session: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/listen-again", response_model=SessionSnapshot)
async def listen_again(controller: ControllerDep):
    """Clears the feed and starts a fresh listening session."""
    try:
        return await controller.listen_again()
    except Exception as e:
        logger.error(f"Error restarting session: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")
