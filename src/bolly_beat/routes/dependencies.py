"""Request-scoped access to the services created at application startup."""

from typing import Annotated

from fastapi import Depends, Request

from bolly_beat.domain.song_identifier import SongIdentifier
from bolly_beat.handlers import SessionController


def get_controller(request: Request) -> SessionController:
    return request.app.state.controller


def get_song_identifier(request: Request) -> SongIdentifier:
    return request.app.state.song_identifier


ControllerDep = Annotated[SessionController, Depends(get_controller)]
SongIdentifierDep = Annotated[SongIdentifier, Depends(get_song_identifier)]
