"""Command-line entrypoint wiring for NewsDesk.

Updates: v0.1 - 2026-10-18 - Added headline, search and preference subcommands.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Sequence

from .config import category_for_section
from .models import NewsFailure, NewsOutcome
from .service import RequestService, build_request_service
from .settings_store import JsonFileStore

logger = logging.getLogger(__name__)

APP_VERSION = "0.2"

_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"
_console_handler: Optional[logging.Handler] = None


def configure_logging(debug: bool = False) -> logging.Handler:
    global _console_handler
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    if _console_handler is None:
        _console_handler = logging.StreamHandler()
        _console_handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt="%H:%M:%S"))
    if _console_handler not in root_logger.handlers:
        root_logger.addHandler(_console_handler)
    _console_handler.setLevel(logging.DEBUG if debug else logging.WARNING)
    return _console_handler


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="newsdesk", description="Browse and search news headlines.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")
    parser.add_argument("--debug", action="store_true", help="log requests and cache activity")
    parser.add_argument("--settings", help="path of the preferences file")
    commands = parser.add_subparsers(dest="command", required=True)

    headlines = commands.add_parser("headlines", help="top headlines")
    headlines.add_argument("--category", help="upstream category or section slug such as shows")
    _add_paging(headlines)

    search = commands.add_parser("search", help="search all articles")
    search.add_argument("query")
    search.add_argument("--sort-by", default=None)
    _add_paging(search)

    sources = commands.add_parser("sources", help="list known sources for a language")
    sources.add_argument("--language")

    language = commands.add_parser("language", help="show or set the active language")
    language.add_argument("code", nargs="?")

    select = commands.add_parser("select", help="choose the sources used for a language")
    select.add_argument("language")
    select.add_argument("sources", nargs="*")
    return parser


def _add_paging(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--language")
    parser.add_argument("--page", type=int)
    parser.add_argument("--page-size", type=int)


def _section_category(value: Optional[str]) -> Optional[str]:
    if not value:
        return value
    return category_for_section(value) or value


def render_outcome(outcome: NewsOutcome) -> List[str]:
    if isinstance(outcome, NewsFailure):
        return [f"error: {outcome.kind.value}: {outcome.message}"]
    lines = [f"{len(outcome.articles)} of {outcome.total_results} article(s)"]
    for article in outcome.articles:
        stamp = article.published_at.strftime("%Y-%m-%d %H:%M") if article.published_at else "----"
        source = f" [{article.source_name}]" if article.source_name else ""
        lines.append(f"{stamp}{source} {article.title}")
        lines.append(f"    {article.url}")
    return lines


def run(args: argparse.Namespace, service: RequestService) -> int:
    if args.command == "headlines":
        outcome = service.fetch_headlines(
            category=_section_category(args.category),
            language=args.language,
            page=args.page,
            page_size=args.page_size,
        )
    elif args.command == "search":
        outcome = service.search_articles(
            q=args.query,
            sort_by=args.sort_by,
            language=args.language,
            page=args.page,
            page_size=args.page_size,
        )
    elif args.command == "sources":
        selected = set(service.selected_sources(args.language))
        for source in service.available_sources(args.language):
            marker = "*" if source.id in selected else " "
            print(f"{marker} {source.id:<24} {source.name} ({source.category}, {source.country})")
        return 0
    elif args.command == "language":
        if args.code:
            if not service.preferences.set_active_language(args.code):
                print(f"error: unsupported language {args.code!r}")
                return 1
        profile = service.current_language()
        print(f"{profile.code} {profile.name}")
        return 0
    else:
        if args.language not in service.preferences.languages:
            print(f"error: unsupported language {args.language!r}")
            return 1
        service.preferences.set_selected_sources(args.language, args.sources)
        print(", ".join(service.selected_sources(args.language)) or "(all sources)")
        return 0

    for line in render_outcome(outcome):
        print(line)
    return 0 if outcome.ok else 1


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.debug)
    logger.debug("Bootstrapping NewsDesk %s", APP_VERSION)
    store = JsonFileStore(args.settings) if args.settings else None
    return run(args, build_request_service(store=store))


__all__ = ["APP_VERSION", "build_parser", "main", "render_outcome", "run"]


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
