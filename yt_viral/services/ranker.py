from __future__ import annotations

from typing import Iterable, List

from yt_viral.models import VideoRecord


class Ranker:
    """
    Sorting policy lives here.
    Descending by viral score and stable: ties keep their input order.
    """

    def rank(self, videos: Iterable[VideoRecord]) -> List[VideoRecord]:
        # sorted() stays stable with reverse=True
        return sorted(videos, key=lambda v: v.viral_score, reverse=True)
