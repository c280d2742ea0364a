# main.py

import argparse
import json
import logging
import sys

from ovrstat.api_client import BlizzardAPIClient
from ovrstat.errors import (
    InvalidPlatformError,
    MalformedDocumentError,
    PlayerNotFoundError,
    UpstreamUnavailableError,
)
from ovrstat.scraper import BrowserDocumentFetcher, OverwatchScraper
from ovrstat.selectors import PLATFORM_ALIASES, PLATFORM_PC

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_INVALID_PLATFORM = 2
EXIT_UPSTREAM = 3


def _safe_print(message: str, stream=None) -> None:
    """Print with ASCII fallback for restricted terminal encodings."""
    stream = stream or sys.stdout
    try:
        print(message, file=stream)
    except UnicodeEncodeError:
        print(message.encode("ascii", "replace").decode("ascii"), file=stream)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Fetch Overwatch career stats as JSON")
    parser.add_argument("tag", help="BattleTag, e.g. 'Player#1234' or 'Player-1234'")
    parser.add_argument(
        "--platform",
        default=PLATFORM_PC,
        help=f"Platform ({', '.join(sorted(PLATFORM_ALIASES))}; default: {PLATFORM_PC})",
    )
    parser.add_argument("--timeout", type=float, default=20, help="HTTP timeout in seconds")
    parser.add_argument("--browser", action="store_true", help="Fetch the career page with Playwright")
    parser.add_argument("--headed", action="store_true", help="Show the browser window (with --browser)")
    parser.add_argument("--indent", type=int, default=2, help="JSON indent (0 for compact)")
    parser.add_argument("--verbose", action="store_true", help="Verbose logging")
    return parser


def run(args: argparse.Namespace, scraper: OverwatchScraper) -> int:
    try:
        ps = scraper.stats(args.tag, args.platform)
    except PlayerNotFoundError:
        _safe_print(f"Player not found: {args.tag}", sys.stderr)
        return EXIT_NOT_FOUND
    except InvalidPlatformError as exc:
        _safe_print(f"Invalid platform: {exc}", sys.stderr)
        return EXIT_INVALID_PLATFORM
    except (UpstreamUnavailableError, MalformedDocumentError) as exc:
        _safe_print(f"Failed to retrieve player stats: {exc}", sys.stderr)
        return EXIT_UPSTREAM

    _safe_print(json.dumps(ps.to_dict(), indent=args.indent or None, ensure_ascii=False))
    return EXIT_OK


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    client = BlizzardAPIClient(timeout_seconds=args.timeout)
    if not args.browser:
        return run(args, OverwatchScraper(client=client))

    fetcher = BrowserDocumentFetcher(headless=not args.headed, timeout_ms=int(args.timeout * 1000))
    return run(args, OverwatchScraper(client=client, document_fetcher=fetcher))


if __name__ == "__main__":
    raise SystemExit(main())
