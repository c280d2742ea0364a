"""
Overwatch career page stats as structured data.
"""

from ovrstat.api_client import BlizzardAPIClient
from ovrstat.errors import (
    OverwatchError,
    PlayerNotFoundError,
    InvalidPlatformError,
    UpstreamUnavailableError,
    MalformedDocumentError,
)
from ovrstat.models import PlayerStats, StatsCollection, TopHeroStats, Rating
from ovrstat.scraper import OverwatchScraper, BrowserDocumentFetcher, stats
from ovrstat.selectors import CURRENT_PROFILE, PLATFORM_ALIASES, PLATFORM_PC

__all__ = [
    'BlizzardAPIClient',
    'OverwatchScraper',
    'BrowserDocumentFetcher',
    'stats',
    'PlayerStats',
    'StatsCollection',
    'TopHeroStats',
    'Rating',
    'CURRENT_PROFILE',
    'PLATFORM_ALIASES',
    'PLATFORM_PC',
    'OverwatchError',
    'PlayerNotFoundError',
    'InvalidPlatformError',
    'UpstreamUnavailableError',
    'MalformedDocumentError',
]
