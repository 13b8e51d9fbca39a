from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable, List, Tuple

from yt_viral.models import VideoRecord


def filter_by_min_score(videos: Iterable[VideoRecord], threshold: float) -> List[VideoRecord]:
    """Keeps videos with viral_score >= threshold, in input order. No clamping."""
    return [v for v in videos if v.viral_score >= threshold]


@dataclass(frozen=True)
class ResultsView:
    """
    Immutable result-list state: the full ranked list plus the current
    score threshold. The visible list is always derived from the full list,
    so moving the threshold never filters an already-filtered subset.
    """

    ranked: Tuple[VideoRecord, ...] = field(default_factory=tuple)
    threshold: float = 0.0

    @property
    def visible(self) -> List[VideoRecord]:
        return filter_by_min_score(self.ranked, self.threshold)

    def with_threshold(self, threshold: float) -> "ResultsView":
        return replace(self, threshold=threshold)

    def with_results(self, ranked: Iterable[VideoRecord]) -> "ResultsView":
        # a new search replaces the list wholesale
        return replace(self, ranked=tuple(ranked))
