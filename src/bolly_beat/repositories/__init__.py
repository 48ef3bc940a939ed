from bolly_beat.repositories.song_repository import SongHookstepRepository

__all__ = ["SongHookstepRepository"]
