"""Video index implementations: YouTube Data API and the search proxy."""

import httpx
from pydantic import ValidationError

from bolly_beat.domain.models import VideoCandidate
from bolly_beat.exceptions import (
    VideoSearchTransportError,
    VideoSearchUnconfiguredError,
)
from bolly_beat.logging import setup_logging

from .interfaces import VideoIndex

logger = setup_logging()

YOUTUBE_SEARCH_URL = "https://www.googleapis.com/youtube/v3/search"


class YouTubeDataApiIndex(VideoIndex):
    """Searches YouTube directly through the Data API v3."""

    def __init__(
        self, client: httpx.AsyncClient, api_key: str, timeout_seconds: float = 15.0
    ):
        self._client = client
        self._api_key = api_key
        self._timeout = timeout_seconds

    async def search(
        self, query: str, max_results: int, duration_hint: str
    ) -> list[VideoCandidate]:
        if not self._api_key:
            raise VideoSearchUnconfiguredError("YOUTUBE_API_KEY")

        params = {
            "part": "snippet",
            "q": query,
            "type": "video",
            "videoDuration": duration_hint,
            "maxResults": str(max_results),
            "order": "relevance",
            "key": self._api_key,
        }

        try:
            response = await self._client.get(
                YOUTUBE_SEARCH_URL, params=params, timeout=self._timeout
            )
            response.raise_for_status()
            data = response.json()
            videos = [_from_search_item(item) for item in data.get("items", [])]
        except httpx.HTTPStatusError as e:
            logger.error(
                "YouTube API error",
                extra={"query": query, "status": e.response.status_code},
            )
            raise VideoSearchTransportError(query, e) from e
        except (httpx.HTTPError, AttributeError, KeyError, TypeError, ValueError) as e:
            logger.exception("YouTube search failed", extra={"query": query})
            raise VideoSearchTransportError(query, e) from e

        logger.info("YouTube search completed", extra={"query": query, "count": len(videos)})
        return videos


class SearchProxyIndex(VideoIndex):
    """Searches through a backend proxy that holds the YouTube credentials."""

    def __init__(
        self, client: httpx.AsyncClient, proxy_url: str, timeout_seconds: float = 15.0
    ):
        self._client = client
        self._proxy_url = proxy_url
        self._timeout = timeout_seconds

    async def search(
        self, query: str, max_results: int, duration_hint: str
    ) -> list[VideoCandidate]:
        if not self._proxy_url:
            raise VideoSearchUnconfiguredError("VIDEO_SEARCH_PROXY_URL")

        body = {
            "query": query,
            "maxResults": max_results,
            "durationHint": duration_hint,
        }

        try:
            response = await self._client.post(
                self._proxy_url, json=body, timeout=self._timeout
            )
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.exception("Search proxy request failed", extra={"query": query})
            raise VideoSearchTransportError(query, e) from e

        if not isinstance(data, dict):
            logger.error("Search proxy returned a non-object body", extra={"query": query})
            raise VideoSearchTransportError(query, ValueError("response is not an object"))

        if response.is_error or not data.get("success"):
            message = data.get("error") or f"Search proxy error {response.status_code}"
            logger.error(
                "Search proxy returned an error", extra={"query": query, "error": message}
            )
            raise VideoSearchTransportError(query, Exception(message))

        try:
            videos = [VideoCandidate.model_validate(v) for v in data.get("videos") or []]
        except (ValidationError, TypeError) as e:
            logger.error("Search proxy returned malformed videos", extra={"query": query})
            raise VideoSearchTransportError(query, e) from e

        logger.info("Proxy search completed", extra={"query": query, "count": len(videos)})
        return videos


def _from_search_item(item: dict) -> VideoCandidate:
    snippet = item["snippet"]
    thumbnails = snippet.get("thumbnails") or {}
    thumbnail = (thumbnails.get("high") or thumbnails.get("default") or {}).get("url", "")
    return VideoCandidate(
        id=item["id"]["videoId"],
        title=snippet.get("title", ""),
        channel_title=snippet.get("channelTitle", ""),
        thumbnail=thumbnail,
        description=snippet.get("description", ""),
    )
