# ovrstat/scraper/__init__.py
"""
Career page scraping for Overwatch player stats.

The pipeline resolves the account, locates the platform view and walks it
with the extractors below.
"""

from ovrstat.errors import (
    OverwatchError,
    PlayerNotFoundError,
    InvalidPlatformError,
    UpstreamUnavailableError,
    MalformedDocumentError,
)
from .core import OverwatchScraper, PipelineState, aggregate_totals, stats
from .career import parse_career_stats
from .general import parse_general_info
from .heroes import parse_hero_stats
from .platform import PlatformView, list_platforms, locate_platform
from .resolver import AccountResolution, AccountStatus, resolve_account
from .session import BrowserDocumentFetcher

__all__ = [
    'OverwatchScraper',
    'PipelineState',
    'aggregate_totals',
    'stats',
    'parse_career_stats',
    'parse_general_info',
    'parse_hero_stats',
    'PlatformView',
    'list_platforms',
    'locate_platform',
    'AccountResolution',
    'AccountStatus',
    'resolve_account',
    'BrowserDocumentFetcher',
    'OverwatchError',
    'PlayerNotFoundError',
    'InvalidPlatformError',
    'UpstreamUnavailableError',
    'MalformedDocumentError',
]
