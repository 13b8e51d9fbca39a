import argparse
import logging
import sys

import httplib2

from yt_viral.config import (
    DEFAULT_DURATION,
    DEFAULT_MIN_SCORE,
    DEFAULT_MODEL,
    DEFAULT_TOP,
    get_api_key,
    get_gemini_api_key,
    save_api_key,
)
from yt_viral.analysis import GeminiAnalyzer
from yt_viral.errors import AnalysisError, MissingCredentialError, UpstreamAPIError
from yt_viral.output.analysis_out import AnalysisPrinter
from yt_viral.output.json_out import JsonPrinter
from yt_viral.output.table import CommentTablePrinter, TablePrinter
from yt_viral.services.comment_service import CommentService
from yt_viral.services.filtering import filter_by_min_score
from yt_viral.services.ranker import Ranker
from yt_viral.services.search_service import SearchService
from yt_viral.youtube_client import DURATION_BUCKETS

def run(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="yt-viral",
        description="Search YouTube and rank results by virality (views / channel subscribers).",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    sub = parser.add_subparsers(dest="command", required=True)

    search = sub.add_parser("search", help="Search YouTube and print videos ranked by viral score.")
    search.add_argument("query", help="Search query string.")
    search.add_argument(
        "--duration",
        choices=sorted(DURATION_BUCKETS),
        default=DEFAULT_DURATION,
        help='Video length: short (<4 min) or long (4-20 min, the provider\'s "medium" bucket).',
    )
    search.add_argument("--min-score", type=float, default=DEFAULT_MIN_SCORE, help="Hide videos below this viral score.")
    search.add_argument("--top", type=int, default=DEFAULT_TOP, help="How many results to print.")
    search.add_argument("--format", choices=["table", "json"], default="table", help="Output format.")

    cm = sub.add_parser("comments", help="Print the top comments of a video.")
    cm.add_argument("video_id", help="YouTube video id.")
    cm.add_argument("--format", choices=["table", "json"], default="table", help="Output format.")

    an = sub.add_parser("analyze", help="AI analysis of a video's top comments.")
    an.add_argument("video_id", help="YouTube video id.")
    an.add_argument("--title", default="", help="Video title, gives the model context.")
    an.add_argument("--model", default=DEFAULT_MODEL, help="Gemini model name.")

    ol = sub.add_parser("outline", help="AI script outline for a keyword.")
    ol.add_argument("keyword", help="Topic keyword, e.g. one recommended by `analyze`.")
    ol.add_argument("--title", required=True, help="Title of the video the keyword came from.")
    ol.add_argument("--model", default=DEFAULT_MODEL, help="Gemini model name.")

    sk = sub.add_parser("set-key", help="Save your YouTube API key to the per-user config file.")
    sk.add_argument("key", help="YouTube Data API v3 key.")

    args = parser.parse_args(argv)
    if args.command == "search" and not args.query.strip():
        parser.error("query must not be empty")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    handlers = {
        "search": _handle_search,
        "comments": _handle_comments,
        "analyze": _handle_analyze,
        "outline": _handle_outline,
        "set-key": _handle_set_key,
    }

    try:
        handlers[args.command](args)
    except MissingCredentialError as e:
        print(f"Enter a credential first: {e}", file=sys.stderr)
        return 2
    except UpstreamAPIError as e:
        print(f"The request failed ({e.stage}): {e.message}", file=sys.stderr)
        return 1
    except AnalysisError as e:
        print(f"The analysis failed: {e}", file=sys.stderr)
        return 1
    except (httplib2.HttpLib2Error, OSError) as e:
        # transport failures below the provider, e.g. DNS or a dropped connection
        print(f"The request failed: {e}", file=sys.stderr)
        return 1
    return 0


def _handle_search(args: argparse.Namespace) -> None:
    # read at call time so a changed key applies to the next run
    api_key = get_api_key()

    videos = SearchService().search_sync(args.query, api_key, duration=args.duration)
    videos = filter_by_min_score(Ranker().rank(videos), args.min_score)
    videos = videos[: max(1, args.top)]

    if args.format == "json":
        JsonPrinter().print(videos)
    else:
        TablePrinter().print(videos)


def _handle_comments(args: argparse.Namespace) -> None:
    comments = CommentService().fetch_comments_sync(args.video_id, get_api_key())

    if args.format == "json":
        JsonPrinter().print_comments(comments)
    else:
        CommentTablePrinter().print(comments)


def _handle_analyze(args: argparse.Namespace) -> None:
    comments = CommentService().fetch_comments_sync(args.video_id, get_api_key())
    if not comments:
        print("This video has no comments to analyze.")
        return

    analyzer = GeminiAnalyzer(get_gemini_api_key(), model_name=args.model)

    title = args.title or args.video_id
    result = analyzer.analyze(title, comments)
    AnalysisPrinter().print(title, result, comment_count=len(comments))


def _handle_outline(args: argparse.Namespace) -> None:
    analyzer = GeminiAnalyzer(get_gemini_api_key(), model_name=args.model)
    print(analyzer.outline(args.keyword, args.title))


def _handle_set_key(args: argparse.Namespace) -> None:
    path = save_api_key(args.key)
    print(f"Saved YOUTUBE_API_KEY to {path}")


if __name__ == "__main__":
    sys.exit(run())
