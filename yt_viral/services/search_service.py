from __future__ import annotations

import asyncio
import logging
from typing import Callable, List

from yt_viral.errors import MissingCredentialError
from yt_viral.models import VideoRecord, VideoStats, VideoStub
from yt_viral.youtube_client import YouTubeClient

logger = logging.getLogger(__name__)

_NO_STATS = VideoStats()


class SearchService:
    """
    Keyword -> one page of VideoRecords joined from three provider calls:

      search      -> stubs (ids, titles, channel ids)
      statistics  -> view/like/comment counts per video   } issued together
      channel     -> subscriber count per channel         } after search

    Each call builds its own client from the credential it is given;
    nothing is carried over between searches.
    """

    def __init__(self, client_factory: Callable[[str], YouTubeClient] = YouTubeClient) -> None:
        self._client_factory = client_factory

    async def search(self, keyword: str, credential: str, duration: str = "any") -> List[VideoRecord]:
        if not (credential or "").strip():
            raise MissingCredentialError("YOUTUBE_API_KEY")
        if not (keyword or "").strip():
            raise ValueError("keyword must not be empty")

        yt = self._client_factory(credential)

        stubs = await asyncio.to_thread(yt.search_videos, keyword, duration)
        logger.info("search %r returned %d videos", keyword, len(stubs))
        if not stubs:
            return []

        video_ids = [s.video_id for s in stubs]
        channel_ids = [s.channel_id for s in stubs]

        # gather re-raises the first stage failure; nothing is joined then
        stats, subs = await asyncio.gather(
            asyncio.to_thread(yt.fetch_video_stats, video_ids),
            asyncio.to_thread(yt.fetch_channel_subscribers, channel_ids),
        )
        logger.info("stats for %d/%d videos, %d channels", len(stats), len(stubs), len(subs))

        return [_join(s, stats.get(s.video_id, _NO_STATS), subs.get(s.channel_id, 0)) for s in stubs]

    def search_sync(self, keyword: str, credential: str, duration: str = "any") -> List[VideoRecord]:
        return asyncio.run(self.search(keyword, credential, duration))


def _join(stub: VideoStub, stats: VideoStats, subscriber_count: int) -> VideoRecord:
    return VideoRecord(
        video_id=stub.video_id,
        title=stub.title,
        thumbnail_url=stub.thumbnail_url,
        channel_title=stub.channel_title,
        channel_id=stub.channel_id,
        published_at=stub.published_at,
        view_count=stats.view_count,
        like_count=stats.like_count,
        comment_count=stats.comment_count,
        subscriber_count=subscriber_count,
    )
