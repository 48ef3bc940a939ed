import asyncio
import json

import httpx
import pytest

from bolly_beat.domain.models import QueueMode
from bolly_beat.domain.queue_engine import VideoQueueEngine
from bolly_beat.domain.video_search import VideoSearchClient
from bolly_beat.exceptions import VideoSearchTransportError, VideoSearchUnconfiguredError
from bolly_beat.infrastructure.youtube_index import SearchProxyIndex, YouTubeDataApiIndex


def _run(index_factory, handler, query="Kajra Re dance"):
    async def run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await index_factory(client).search(query, 10, "short")

    return asyncio.run(run())


def test_youtube_search_sends_expected_parameters():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["params"] = dict(request.url.params)
        return httpx.Response(
            200,
            json={
                "items": [
                    {
                        "id": {"videoId": "abc"},
                        "snippet": {
                            "title": "Kajra Re dance",
                            "channelTitle": "Studio",
                            "description": "steps",
                            "thumbnails": {
                                "default": {"url": "https://i.ytimg.com/default.jpg"},
                                "high": {"url": "https://i.ytimg.com/high.jpg"},
                            },
                        },
                    },
                    {
                        "id": {"videoId": "def"},
                        "snippet": {
                            "title": "Kajra Re cover",
                            "thumbnails": {"default": {"url": "https://i.ytimg.com/d2.jpg"}},
                        },
                    },
                ]
            },
        )

    videos = _run(lambda c: YouTubeDataApiIndex(c, "yt-key"), handler)

    assert seen["params"] == {
        "part": "snippet",
        "q": "Kajra Re dance",
        "type": "video",
        "videoDuration": "short",
        "maxResults": "10",
        "order": "relevance",
        "key": "yt-key",
    }
    assert [v.id for v in videos] == ["abc", "def"]
    assert videos[0].thumbnail == "https://i.ytimg.com/high.jpg"
    assert videos[0].channel_title == "Studio"
    assert videos[1].thumbnail == "https://i.ytimg.com/d2.jpg"


def test_youtube_error_status_raises_transport_error():
    def handler(request):
        return httpx.Response(403, json={"error": {"message": "quotaExceeded"}})

    with pytest.raises(VideoSearchTransportError):
        _run(lambda c: YouTubeDataApiIndex(c, "yt-key"), handler)


def test_youtube_malformed_item_raises_transport_error():
    def handler(request):
        return httpx.Response(200, json={"items": [{"id": {}}]})

    with pytest.raises(VideoSearchTransportError):
        _run(lambda c: YouTubeDataApiIndex(c, "yt-key"), handler)


def test_youtube_without_key_is_unconfigured():
    def handler(request):
        raise AssertionError("no request expected")

    with pytest.raises(VideoSearchUnconfiguredError):
        _run(lambda c: YouTubeDataApiIndex(c, ""), handler)


def test_proxy_posts_query_and_parses_videos():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = json.loads(request.content)
        return httpx.Response(
            200,
            json={
                "success": True,
                "videos": [
                    {
                        "id": "p1",
                        "title": "Proxy video",
                        "channelTitle": "Proxy channel",
                        "thumbnail": "https://i.ytimg.com/p1.jpg",
                        "description": "",
                    }
                ],
            },
        )

    videos = _run(lambda c: SearchProxyIndex(c, "http://proxy.local/search"), handler)

    assert seen["body"] == {"query": "Kajra Re dance", "maxResults": 10, "durationHint": "short"}
    assert videos[0].id == "p1"
    assert videos[0].channel_title == "Proxy channel"


def test_proxy_failure_payload_raises_transport_error():
    def handler(request):
        return httpx.Response(500, json={"success": False, "error": "YOUTUBE_API_KEY not configured"})

    with pytest.raises(VideoSearchTransportError) as exc_info:
        _run(lambda c: SearchProxyIndex(c, "http://proxy.local/search"), handler)

    assert "YOUTUBE_API_KEY not configured" in str(exc_info.value.cause)


@pytest.mark.parametrize(
    "payload",
    [
        ["p1", "p2"],
        {"success": True, "videos": [{"title": "no id"}]},
        {"success": True, "videos": ["p1"]},
        {"success": True, "videos": 3},
    ],
)
def test_proxy_malformed_payload_raises_transport_error(payload):
    def handler(request):
        return httpx.Response(200, json=payload)

    with pytest.raises(VideoSearchTransportError):
        _run(lambda c: SearchProxyIndex(c, "http://proxy.local/search"), handler)


def test_youtube_non_object_body_raises_transport_error():
    def handler(request):
        return httpx.Response(200, json=["abc"])

    with pytest.raises(VideoSearchTransportError):
        _run(lambda c: YouTubeDataApiIndex(c, "yt-key"), handler)


def test_malformed_proxy_answer_becomes_queue_error():
    def handler(request):
        return httpx.Response(200, json={"success": True, "videos": [{"title": "no id"}]})

    async def run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            index = SearchProxyIndex(client, "http://proxy.local/search")
            engine = VideoQueueEngine(VideoSearchClient(index, fallback_enabled=False))
            added = await engine.enqueue("song", QueueMode.APPEND)
            return added, engine.snapshot()

    added, snapshot = asyncio.run(run())

    assert added == 0
    assert snapshot.items == []
    assert snapshot.error == "Video search failed for query 'song dance'"
