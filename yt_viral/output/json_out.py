from __future__ import annotations

import json
from typing import List

from yt_viral.models import CommentRecord, VideoRecord


class JsonPrinter:
    def print(self, videos: List[VideoRecord]) -> None:
        payload = [
            {
                "video_id": v.video_id,
                "title": v.title,
                "channel_title": v.channel_title,
                "channel_id": v.channel_id,
                "published_at": v.published_at,
                "thumbnail_url": v.thumbnail_url,
                "view_count": v.view_count,
                "like_count": v.like_count,
                "comment_count": v.comment_count,
                "subscriber_count": v.subscriber_count,
                "viral_score": round(v.viral_score, 4),
                "url": v.url,
            }
            for v in videos
        ]
        print(json.dumps(payload, indent=2, ensure_ascii=False))

    def print_comments(self, comments: List[CommentRecord]) -> None:
        payload = [{"author": c.author, "text": c.text, "like_count": c.like_count} for c in comments]
        print(json.dumps(payload, indent=2, ensure_ascii=False))
