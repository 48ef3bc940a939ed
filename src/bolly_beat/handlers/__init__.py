from bolly_beat.handlers.session_controller import SessionController

__all__ = ["SessionController"]
