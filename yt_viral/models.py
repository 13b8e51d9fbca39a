from dataclasses import dataclass

from yt_viral.services.scoring import compute_viral_score


@dataclass(frozen=True)
class VideoStub:
    video_id: str
    title: str
    thumbnail_url: str
    channel_id: str
    channel_title: str
    published_at: str  # ISO string


@dataclass(frozen=True)
class VideoStats:
    view_count: int = 0
    like_count: int = 0
    comment_count: int = 0


@dataclass(frozen=True)
class VideoRecord:
    video_id: str
    title: str
    thumbnail_url: str
    channel_title: str
    channel_id: str
    published_at: str  # ISO string
    view_count: int = 0
    like_count: int = 0
    comment_count: int = 0
    subscriber_count: int = 0

    @property
    def viral_score(self) -> float:
        # derived on access, never stored
        return compute_viral_score(self.view_count, self.subscriber_count)

    @property
    def url(self) -> str:
        return f"https://www.youtube.com/watch?v={self.video_id}"


@dataclass(frozen=True)
class CommentRecord:
    author: str
    text: str  # raw provider markup, escape before rendering
    like_count: int = 0
