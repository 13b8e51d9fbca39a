from __future__ import annotations

import threading
from typing import Dict, List, Optional

import pytest

from yt_viral.errors import UpstreamAPIError
from yt_viral.models import CommentRecord, VideoRecord, VideoStats, VideoStub


def _video(video_id: str, views: int = 0, subs: int = 0, **kw) -> VideoRecord:
    return VideoRecord(
        video_id=video_id,
        title=kw.pop("title", f"title {video_id}"),
        thumbnail_url=kw.pop("thumbnail_url", ""),
        channel_title=kw.pop("channel_title", "chan"),
        channel_id=kw.pop("channel_id", "UC1"),
        published_at=kw.pop("published_at", "2025-01-20T12:34:56Z"),
        view_count=views,
        subscriber_count=subs,
        **kw,
    )


def _stub(video_id: str, channel_id: str = "UC1") -> VideoStub:
    return VideoStub(
        video_id=video_id,
        title=f"title {video_id}",
        thumbnail_url=f"https://i.ytimg.com/vi/{video_id}/hqdefault.jpg",
        channel_id=channel_id,
        channel_title=f"channel {channel_id}",
        published_at="2025-01-20T12:34:56Z",
    )


class FakeYouTubeClient:
    """Stands in for YouTubeClient; records every call made on it."""

    def __init__(
        self,
        stubs: Optional[List[VideoStub]] = None,
        stats: Optional[Dict[str, VideoStats]] = None,
        subs: Optional[Dict[str, int]] = None,
        comments: Optional[List[CommentRecord]] = None,
        fail_stage: str = "",
        barrier: Optional[threading.Barrier] = None,
    ) -> None:
        self.stubs = stubs or []
        self.stats = stats or {}
        self.subs = subs or {}
        self.comments = comments or []
        self.fail_stage = fail_stage
        self.barrier = barrier
        self.calls: list[tuple] = []

    def _maybe_fail(self, stage: str) -> None:
        if self.fail_stage == stage:
            raise UpstreamAPIError(stage, f"{stage} quota exceeded")

    def search_videos(self, query, duration="any"):
        self.calls.append(("search", query, duration))
        self._maybe_fail("search")
        return list(self.stubs)

    def fetch_video_stats(self, video_ids):
        self.calls.append(("statistics", list(video_ids)))
        if self.barrier:
            self.barrier.wait()
        self._maybe_fail("statistics")
        return dict(self.stats)

    def fetch_channel_subscribers(self, channel_ids):
        self.calls.append(("channel", list(channel_ids)))
        if self.barrier:
            self.barrier.wait()
        self._maybe_fail("channel")
        return dict(self.subs)

    def fetch_comments(self, video_id, max_comments=50):
        self.calls.append(("comments", video_id, max_comments))
        self._maybe_fail("comments")
        return list(self.comments)


class FactorySpy:
    def __init__(self, client: FakeYouTubeClient) -> None:
        self.client = client
        self.credentials: list[str] = []

    def __call__(self, credential: str) -> FakeYouTubeClient:
        self.credentials.append(credential)
        return self.client


@pytest.fixture
def make_video():
    return _video


@pytest.fixture
def make_stub():
    return _stub


@pytest.fixture
def fake_factory():
    def _make(**kw) -> FactorySpy:
        return FactorySpy(FakeYouTubeClient(**kw))

    return _make
