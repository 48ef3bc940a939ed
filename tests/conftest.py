import pytest

from bolly_beat.domain.models import SongIdentification


@pytest.fixture
def identified_song() -> SongIdentification:
    return SongIdentification(
        identified=True,
        song_title="Mera Joota Hai Japani",
        movie_name="Shree 420",
        release_year=1955,
        singers=["Mukesh"],
        music_director="Shankar-Jaikishan",
        hookstep_description=["Step 1: Tip the hat", "Step 2: Swing the cane"],
        hookstep_time_start="00:15",
        hookstep_time_end="00:30",
        youtube_video_id="abc123",
        youtube_timestamp_seconds=15,
    )
