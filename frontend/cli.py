from __future__ import annotations

import argparse
import logging
import sys
from datetime import date

from backend.app.models import (
    DEFAULT_SATURATION,
    DEFAULT_SEARCH_VOLUME,
    DEFAULT_SORT,
    SATURATION_OPTIONS,
    SEARCH_VOLUME_OPTIONS,
    SORT_OPTIONS,
    SearchParameters,
    Trend,
)
from frontend.api import TrendsApiClient
from frontend.storage import SavedTrendsStorage
from frontend.view_state import IdeaPanel, ViewState, saturation_bar_width, saturation_percent

BAR_WIDTH = 20


def render_card(trend: Trend, index: int, saved: bool) -> str:
    filled = round(saturation_bar_width(trend) / 100 * BAR_WIDTH)
    bar = "#" * filled + "-" * (BAR_WIDTH - filled)
    star = "*" if saved else " "
    return (
        f"{index:>3}. [{star}] {trend.term}\n"
        f"     searches/day: {trend.daily_searches:,}   videos: {trend.video_count:,}\n"
        f"     [{bar}] {saturation_percent(trend):.4f}% saturation"
    )


def render_list(state: ViewState) -> str:
    if state.error:
        return f"Error: {state.error}"
    message = state.empty_state_message()
    if message:
        return message
    cards = [
        render_card(trend, idx, state.is_saved(trend))
        for idx, trend in enumerate(state.visible_trends(), start=1)
    ]
    return "\n".join(cards)


def find_trend(trends: list[Trend], term: str) -> Trend | None:
    for trend in trends:
        if trend.term == term:
            return trend
    return None


def iso_date(value: str) -> str:
    try:
        return date.fromisoformat(value).isoformat()
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Find YouTube content gaps: high demand, few videos.")
    parser.add_argument("--api-url", default=None, help="Trends endpoint (default: $YTGAP_API_URL)")
    parser.add_argument("--storage", default=None, help="Saved trends file (default: $YTGAP_STORAGE_FILE)")
    parser.add_argument("--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    search = sub.add_parser("search", help="Ask for content-gap topics")
    search.add_argument("--date", type=iso_date, default=None, help="YYYY-MM-DD (default: today)")
    search.add_argument("--niche", default="")
    search.add_argument("--volume", type=int, choices=SEARCH_VOLUME_OPTIONS, default=DEFAULT_SEARCH_VOLUME)
    search.add_argument("--saturation", type=float, choices=SATURATION_OPTIONS, default=DEFAULT_SATURATION)
    search.add_argument("--sort", choices=SORT_OPTIONS, default=DEFAULT_SORT)
    search.add_argument("--save", nargs="*", default=[], metavar="TERM", help="Toggle save for these result terms")

    saved = sub.add_parser("saved", help="Show saved topics")
    saved.add_argument("--sort", choices=SORT_OPTIONS, default=DEFAULT_SORT)
    saved.add_argument("--remove", nargs="*", default=[], metavar="TERM")

    ideas = sub.add_parser("ideas", help="Generate titles and an outline for a term")
    ideas.add_argument("term")

    return parser.parse_args(argv)


def run_search(state: ViewState, args: argparse.Namespace) -> int:
    state.params = SearchParameters(
        **({"selected_date": args.date} if args.date else {}),
        niche=args.niche,
        min_search_volume=args.volume,
        max_saturation=args.saturation,
        sort_by=args.sort,
    )
    state.search()
    for term in args.save:
        trend = find_trend(state.trends, term)
        if trend is None:
            print(f"Not in results: {term}", file=sys.stderr)
            continue
        state.toggle_save(trend)
    print(render_list(state))
    return 1 if state.error else 0


def run_saved(state: ViewState, args: argparse.Namespace) -> int:
    state.current_view = "saved"
    state.params = state.params.model_copy(update={"sort_by": args.sort})
    for term in args.remove:
        trend = find_trend(state.saved_trends, term)
        if trend is None:
            print(f"Not saved: {term}", file=sys.stderr)
            continue
        state.toggle_save(trend)
    print(render_list(state))
    return 0


def run_ideas(client: TrendsApiClient, term: str) -> int:
    if not term.strip():
        print("Error: term is required", file=sys.stderr)
        return 1
    panel = IdeaPanel(api=client, trend=Trend(term=term, daily_searches=0, video_count=0))
    ideas = panel.toggle()
    if ideas is None:
        print(f"Error: {panel.error}", file=sys.stderr)
        return 1
    print("Titles:")
    for idx, title in enumerate(ideas.titles, start=1):
        print(f"  {idx}. {title}")
    print()
    print(ideas.outline)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    client = TrendsApiClient(base_url=args.api_url)
    if args.command == "ideas":
        return run_ideas(client, args.term)

    state = ViewState(api=client, storage=SavedTrendsStorage(args.storage))
    if args.command == "search":
        return run_search(state, args)
    return run_saved(state, args)


if __name__ == "__main__":
    sys.exit(main())
