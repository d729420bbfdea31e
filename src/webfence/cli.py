"""CLI entry point for webfence."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from .adblock.engine import FilterEngine
from .adblock.filter_lists import build_filter_list
from .adblock.matcher import Blocked
from .config import WebfenceConfig
from .exceptions import WebfenceError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="webfence",
        description="Show a web site with advertising and tracking requests blocked",
    )
    parser.add_argument("--config", type=Path, help="Path to config.json")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    check_parser = subparsers.add_parser("check", help="Classify URLs against the filter list")
    check_parser.add_argument("urls", nargs="+", metavar="URL")

    subparsers.add_parser("fragments", help="Print the effective filter list")

    open_parser = subparsers.add_parser("open", help="Open a site in the filtered browser view")
    open_parser.add_argument("url", nargs="?", help="Site to open (default: start_url from config)")
    open_parser.add_argument("--headless", action="store_true", help="Run without a window")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if args.command is None:
        parser.print_help()
        return 1

    try:
        config = WebfenceConfig.load(args.config)

        if args.command == "check":
            return _handle_check(config, args.urls)
        if args.command == "fragments":
            return _handle_fragments(config)
        if args.command == "open":
            if args.url:
                config.start_url = args.url
            if args.headless:
                config.headless = True
            return _handle_open(config)
    except WebfenceError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    return 0


def _handle_check(config: WebfenceConfig, urls: list[str]) -> int:
    engine = FilterEngine(build_filter_list(config))
    for url in urls:
        result = engine.classify(url)
        if isinstance(result, Blocked):
            print(f"BLOCKED  {url}  [{', '.join(sorted(result.fragments))}]")
        else:
            print(f"ALLOWED  {url}")
    return 0


def _handle_fragments(config: WebfenceConfig) -> int:
    for fragment in sorted(build_filter_list(config)):
        print(fragment)
    return 0


def _handle_open(config: WebfenceConfig) -> int:
    from .view import WrapperView

    async def _run() -> None:
        async with WrapperView(config) as view:
            await view.wait_closed()

    try:
        asyncio.run(_run())
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())
