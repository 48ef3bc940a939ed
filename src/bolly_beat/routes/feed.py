"""Video feed navigation endpoints."""

from fastapi import APIRouter

from bolly_beat.domain.models import QueueSnapshot
from bolly_beat.routes.dependencies import ControllerDep

router = APIRouter(prefix="/feed", tags=["feed"])


@router.post("/next", response_model=QueueSnapshot)
async def next_video(controller: ControllerDep):
    return await controller.go_to_next()


@router.post("/previous", response_model=QueueSnapshot)
async def previous_video(controller: ControllerDep):
    return await controller.go_to_previous()
