from __future__ import annotations

import html
import re
from typing import List

from yt_viral.models import CommentRecord, VideoRecord


class TablePrinter:
    def print(self, videos: List[VideoRecord]) -> None:
        if not videos:
            print("No results.")
            return

        rows = []
        for i, v in enumerate(videos, start=1):
            rows.append(
                [
                    str(i),
                    f"{v.viral_score:.2f}x",
                    _truncate(v.title, 50),
                    _truncate(v.channel_title, 20),
                    f"{v.view_count:,}",
                    f"{v.subscriber_count:,}",
                    v.url,
                ]
            )

        headers = ["#", "score", "title", "channel", "views", "subs", "url"]
        _print_table(headers, rows)


class CommentTablePrinter:
    def print(self, comments: List[CommentRecord]) -> None:
        if not comments:
            print("No comments (disabled or none yet).")
            return

        rows = [
            [str(i), f"{c.like_count:,}", _truncate(c.author, 20), _truncate(_plain_text(c.text), 80)]
            for i, c in enumerate(comments, start=1)
        ]
        _print_table(["#", "likes", "author", "comment"], rows)


_TAG_RE = re.compile(r"<[^>]+>")


def _plain_text(markup: str) -> str:
    # textDisplay is provider HTML; render it as one plain line
    text = html.unescape(_TAG_RE.sub(" ", markup or ""))
    return " ".join(text.split())


def _truncate(text: str, max_len: int) -> str:
    t = (text or "").strip()
    if len(t) <= max_len:
        return t
    return t[: max_len - 1] + "…"


def _print_table(headers: List[str], rows: List[List[str]]) -> None:
    # basic table printer (no deps)
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    def fmt_row(row):
        return " | ".join(cell.ljust(widths[i]) for i, cell in enumerate(row))

    print(fmt_row(headers))
    print("-+-".join("-" * w for w in widths))
    for row in rows:
        print(fmt_row(row))
