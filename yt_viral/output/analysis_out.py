from __future__ import annotations

import html

from yt_viral.analysis import AnalysisResult


class AnalysisPrinter:
    def print(self, title: str, result: AnalysisResult, comment_count: int) -> None:
        print(f"Analysis of \"{title}\" ({comment_count} comments)")
        print(f"\nSentiment: {result.sentiment or '-'}")

        _section("Viewers liked", result.positive_points)
        _section("Viewers missed", result.negative_points)
        _section("Viewer needs", result.user_needs)
        _section("Content ideas", result.content_ideas)

        if result.recommended_keywords:
            print("\nRecommended keywords (use with `yt-viral outline`):")
            for i, k in enumerate(result.recommended_keywords, start=1):
                print(f"  {i}. {k}")


def _section(heading: str, items) -> None:
    print(f"\n{heading}:")
    if not items:
        print("  -")
        return
    for item in items:
        # model output may echo comment markup
        print(f"  - {html.unescape(str(item)).strip()}")
