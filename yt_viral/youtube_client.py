from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterable, List, Optional

from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from googleapiclient.http import build_http

from yt_viral.errors import UpstreamAPIError
from yt_viral.models import CommentRecord, VideoStats, VideoStub

logger = logging.getLogger(__name__)

SEARCH_PAGE_SIZE = 20
COMMENT_PAGE_SIZE = 50

# UI duration option -> YouTube videoDuration bucket.
# "long" maps to the provider's "medium" bucket (4-20 min), not "long" (>20 min).
DURATION_BUCKETS: Dict[str, Optional[str]] = {
    "any": None,
    "short": "short",
    "long": "medium",
}


class YouTubeClient:
    """
    Thin wrapper around YouTube Data API v3 calls.
    Responsibilities:
      - search one page of video stubs
      - fetch video stats and channel subscriber counts in batches
      - fetch top-level comments for a video

    Every call executes on a fresh http transport, so separate calls
    may run on separate threads.
    """

    def __init__(self, api_key: str, service: Any = None) -> None:
        self._service = service or build("youtube", "v3", developerKey=api_key)

    def search_videos(self, query: str, duration: str = "any") -> List[VideoStub]:
        if duration not in DURATION_BUCKETS:
            raise ValueError(f"unknown duration filter: {duration!r}")

        params: Dict[str, Any] = {
            "part": "snippet",
            "q": query,
            "type": "video",
            "maxResults": SEARCH_PAGE_SIZE,
        }
        bucket = DURATION_BUCKETS[duration]
        if bucket:
            params["videoDuration"] = bucket

        logger.debug("search.list q=%r duration=%s", query, bucket or "any")
        resp = _execute(self._service.search().list(**params), stage="search")

        stubs: list[VideoStub] = []
        seen = set()
        for item in resp.get("items", []) or []:
            vid = (item.get("id", {}) or {}).get("videoId")
            if not vid or vid in seen:
                continue
            seen.add(vid)

            snippet = item.get("snippet", {}) or {}
            stubs.append(
                VideoStub(
                    video_id=vid,
                    title=snippet.get("title", ""),
                    thumbnail_url=_thumbnail_url(snippet.get("thumbnails")),
                    channel_id=snippet.get("channelId", ""),
                    channel_title=snippet.get("channelTitle", ""),
                    published_at=snippet.get("publishedAt", ""),
                )
            )

        return stubs

    def fetch_video_stats(self, video_ids: Iterable[str]) -> Dict[str, VideoStats]:
        ids = list(video_ids)
        if not ids:
            return {}

        # one page of search results fits in a single videos.list batch (limit 50)
        req = self._service.videos().list(part="statistics", id=",".join(ids))
        resp = _execute(req, stage="statistics")

        stats: dict[str, VideoStats] = {}
        for item in resp.get("items", []) or []:
            s = item.get("statistics", {}) or {}
            stats[item.get("id", "")] = VideoStats(
                view_count=_safe_int(s.get("viewCount")),
                like_count=_safe_int(s.get("likeCount")),
                comment_count=_safe_int(s.get("commentCount")),
            )
        return stats

    def fetch_channel_subscribers(self, channel_ids: Iterable[str]) -> Dict[str, int]:
        ids = _dedupe(c for c in channel_ids if c)
        if not ids:
            return {}

        req = self._service.channels().list(part="statistics", id=",".join(ids))
        resp = _execute(req, stage="channel")

        subs: dict[str, int] = {}
        for item in resp.get("items", []) or []:
            s = item.get("statistics", {}) or {}
            # hiddenSubscriberCount channels omit subscriberCount -> 0
            subs[item.get("id", "")] = _safe_int(s.get("subscriberCount"))
        return subs

    def fetch_comments(self, video_id: str, max_comments: int = COMMENT_PAGE_SIZE) -> List[CommentRecord]:
        """
        Fetch up to max_comments top-level comments, relevance ordered.
        Note: comments may be disabled; returns [] then.
        """
        if max_comments < 1:
            return []

        req = self._service.commentThreads().list(
            part="snippet",
            videoId=video_id,
            maxResults=min(max_comments, 100),
            order="relevance",
        )
        try:
            resp = _execute(req, stage="comments")
        except _CommentsDisabled:
            logger.info("comments disabled for %s", video_id)
            return []

        comments: List[CommentRecord] = []
        for item in resp.get("items", []) or []:
            thread = item.get("snippet", {}) or {}
            top_level = thread.get("topLevelComment", {}) or {}
            snippet = top_level.get("snippet", {}) or {}
            comments.append(
                CommentRecord(
                    author=snippet.get("authorDisplayName", ""),
                    text=snippet.get("textDisplay", ""),
                    like_count=_safe_int(snippet.get("likeCount")),
                )
            )

        return comments


class _CommentsDisabled(UpstreamAPIError):
    pass


def _execute(request, stage: str) -> dict:
    try:
        resp = request.execute(http=build_http())
    except HttpError as e:
        message, reasons = _error_payload(e.content)
        if stage == "comments" and "commentsDisabled" in reasons:
            raise _CommentsDisabled(stage, message) from e
        raise UpstreamAPIError(stage, message or str(e.reason or e)) from e

    # some transports hand back the error envelope as a normal body
    if isinstance(resp, dict) and resp.get("error"):
        message, _ = _error_payload(resp)
        raise UpstreamAPIError(stage, message or f"YouTube {stage} API error")

    return resp or {}


def _error_payload(content) -> tuple[str, set[str]]:
    """Returns (message, reasons) from a provider error envelope."""
    data = content
    if isinstance(content, (bytes, str)):
        try:
            data = json.loads(content)
        except ValueError:
            text = content.decode("utf-8", "replace") if isinstance(content, bytes) else content
            return (text.strip(), set())

    err = data.get("error") if isinstance(data, dict) else None
    if not isinstance(err, dict):
        return (str(err or ""), set())

    reasons = {e.get("reason", "") for e in err.get("errors", []) or [] if isinstance(e, dict)}
    return (err.get("message", ""), reasons)


def _thumbnail_url(thumbnails) -> str:
    thumbnails = thumbnails or {}
    for size in ("high", "medium", "default"):
        url = (thumbnails.get(size) or {}).get("url")
        if url:
            return url
    return ""


def _safe_int(value) -> int:
    try:
        return max(0, int(value))
    except Exception:
        return 0


def _dedupe(items: Iterable[str]) -> List[str]:
    # dedupe while preserving order
    seen = set()
    unique = []
    for x in items:
        if x not in seen:
            seen.add(x)
            unique.append(x)
    return unique
