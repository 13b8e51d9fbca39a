from __future__ import annotations

import asyncio
import logging
from typing import Callable, List

from yt_viral.errors import MissingCredentialError
from yt_viral.models import CommentRecord
from yt_viral.youtube_client import COMMENT_PAGE_SIZE, YouTubeClient

logger = logging.getLogger(__name__)


class CommentService:
    def __init__(self, client_factory: Callable[[str], YouTubeClient] = YouTubeClient) -> None:
        self._client_factory = client_factory

    async def fetch_comments(self, video_id: str, credential: str) -> List[CommentRecord]:
        """
        Top-level comments for one video, relevance ordered (one page of 50).
        Comments disabled or none at all -> [].
        """
        if not (credential or "").strip():
            raise MissingCredentialError("YOUTUBE_API_KEY")
        if not (video_id or "").strip():
            raise ValueError("video_id must not be empty")

        yt = self._client_factory(credential)
        comments = await asyncio.to_thread(yt.fetch_comments, video_id, COMMENT_PAGE_SIZE)
        logger.info("fetched %d comments for %s", len(comments), video_id)
        return comments

    def fetch_comments_sync(self, video_id: str, credential: str) -> List[CommentRecord]:
        return asyncio.run(self.fetch_comments(video_id, credential))
