import asyncio

import pytest

from bolly_beat.domain.fallback_videos import FALLBACK_VIDEOS
from bolly_beat.domain.video_search import VideoSearchClient
from bolly_beat.exceptions import (
    InvalidQueryError,
    VideoSearchTransportError,
    VideoSearchUnconfiguredError,
)
from tests.fakes import FakeVideoIndex, make_videos


def test_query_is_trimmed_and_augmented_with_keyword():
    index = FakeVideoIndex({"Kajra Re dance": make_videos("k1")})
    client = VideoSearchClient(index, keyword="dance")

    outcome = asyncio.run(client.search("  Kajra Re  "))

    assert index.queries == ["Kajra Re dance"]
    assert outcome.query == "Kajra Re"
    assert [v.id for v in outcome.videos] == ["k1"]
    assert not outcome.degraded
    assert outcome.error is None


def test_blank_query_is_rejected():
    client = VideoSearchClient(FakeVideoIndex())

    with pytest.raises(InvalidQueryError):
        asyncio.run(client.search("   "))


def test_transport_error_falls_back_to_builtin_videos():
    index = FakeVideoIndex(error=VideoSearchTransportError("x dance"))
    client = VideoSearchClient(index, fallback_enabled=True)

    outcome = asyncio.run(client.search("x", max_results=3))

    assert outcome.degraded
    assert outcome.error == "Video search failed for query 'x dance'"
    assert outcome.videos == list(FALLBACK_VIDEOS[:3])


def test_transport_error_propagates_without_fallback():
    index = FakeVideoIndex(error=VideoSearchTransportError("x dance"))
    client = VideoSearchClient(index, fallback_enabled=False)

    with pytest.raises(VideoSearchTransportError):
        asyncio.run(client.search("x"))


def test_unconfigured_index_never_falls_back():
    index = FakeVideoIndex(error=VideoSearchUnconfiguredError("YOUTUBE_API_KEY"))
    client = VideoSearchClient(index, fallback_enabled=True)

    with pytest.raises(VideoSearchUnconfiguredError):
        asyncio.run(client.search("x"))


def test_fallback_videos_have_unique_ids():
    ids = [v.id for v in FALLBACK_VIDEOS]
    assert len(ids) == len(set(ids)) == 10
