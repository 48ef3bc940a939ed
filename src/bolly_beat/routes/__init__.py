from bolly_beat.routes.feed import router as feed_router
from bolly_beat.routes.session import router as session_router
from bolly_beat.routes.songs import router as songs_router

__all__ = ["feed_router", "session_router", "songs_router"]
