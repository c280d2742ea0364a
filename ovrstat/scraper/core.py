from __future__ import annotations

import logging
from enum import Enum
from http.client import HTTPException
from typing import Any, Callable, Optional
from urllib.parse import quote

from bs4 import BeautifulSoup, Tag

from ovrstat.api_client import BlizzardAPIClient
from ovrstat.errors import (
    InvalidPlatformError,
    MalformedDocumentError,
    PlayerNotFoundError,
    UpstreamUnavailableError,
)
from ovrstat.models import PlayerStats, StatsCollection
from ovrstat.parser import clean_value, parse_type
from ovrstat.selectors import CURRENT_PROFILE, PLATFORM_PC, SelectorProfile
from .career import parse_career_stats
from .general import parse_general_info
from .heroes import parse_hero_stats
from .platform import PlatformView, locate_platform, resolve_platform_key
from .resolver import AccountResolution, AccountStatus, resolve_account

logger = logging.getLogger(__name__)


class PipelineState(Enum):
    START = "start"
    RESOLVING_ACCOUNT = "resolving_account"
    NOT_FOUND = "not_found"
    PRIVATE = "private"
    LOCATING_PLATFORM = "locating_platform"
    UNSUPPORTED = "unsupported"
    EXTRACTING_GENERAL = "extracting_general"
    EXTRACTING_QUICK_PLAY = "extracting_quick_play"
    EXTRACTING_COMPETITIVE = "extracting_competitive"
    AGGREGATING = "aggregating"
    DONE = "done"
    UPSTREAM_UNAVAILABLE = "upstream_unavailable"


def aggregate_totals(ps: PlayerStats) -> PlayerStats:
    """Add the allHeroes game counters of both modes into the profile totals."""
    for collection in (ps.quick_play_stats, ps.competitive_stats):
        ps.games_played += collection.game_stat("gamesPlayed")
        ps.games_won += collection.game_stat("gamesWon")
        ps.games_lost += collection.game_stat("gamesLost")
    return ps


class OverwatchScraper:
    """
    Career page scraper for a single Overwatch player.

    The scraper keeps no per-request state, so one instance can serve
    concurrent callers.
    """

    CAREER_URL = "https://overwatch.blizzard.com/en-us/career"

    def __init__(
        self,
        client: Optional[Any] = None,
        document_fetcher: Optional[Any] = None,
        profile: SelectorProfile = CURRENT_PROFILE,
        career_url: Optional[str] = None,
    ):
        self.client = client if client is not None else BlizzardAPIClient()
        self.document_fetcher = document_fetcher if document_fetcher is not None else self.client
        self.profile = profile
        self.career_url = (career_url or self.CAREER_URL).rstrip("/")

    # --- Main entry point ---

    def stats(self, tag: str, platform: str = PLATFORM_PC) -> PlayerStats:
        """
        Scrape all stats for `tag` on `platform`.

        Private profiles come back with `private=True` and identity only.

        Raises:
            InvalidPlatformError: Unknown platform, or no view for it on the page
            PlayerNotFoundError: No such account, or the career page is missing
            UpstreamUnavailableError: Account search or page fetch failed
            MalformedDocumentError: The page lacks the masthead or platform filters
        """
        state = PipelineState.START
        if resolve_platform_key(platform, self.profile) is None:
            raise InvalidPlatformError(f"Invalid platform '{platform}'")

        state = self._advance(tag, state, PipelineState.RESOLVING_ACCOUNT)
        resolution = resolve_account(tag, lambda t: self._upstream(tag, self.client.search_accounts, t))

        if resolution.status is AccountStatus.NOT_FOUND:
            self._advance(tag, state, PipelineState.NOT_FOUND)
            raise PlayerNotFoundError(f"Player '{tag}' not found")

        if resolution.status is AccountStatus.PRIVATE:
            self._advance(tag, state, PipelineState.PRIVATE)
            return self._private_stats(resolution)

        state = self._advance(tag, state, PipelineState.LOCATING_PLATFORM)
        url = self.profile_url(resolution.canonical_tag)
        logger.info("Profile URL %s", url)
        html = self._upstream(tag, self.document_fetcher.fetch_document, url)
        document = BeautifulSoup(html, "html.parser")
        masthead = self._check_document(document, tag)

        view = locate_platform(document, platform, self.profile)
        if view is None:
            self._advance(tag, state, PipelineState.UNSUPPORTED)
            raise InvalidPlatformError(f"Player '{tag}' has no stats for platform '{platform}'")

        state = self._advance(tag, state, PipelineState.EXTRACTING_GENERAL)
        ps = parse_general_info(view, masthead, self.profile)
        if not ps.name:
            ps.name = resolution.display_name

        quick_mode, competitive_mode = self.profile.mode_ids
        state = self._advance(tag, state, PipelineState.EXTRACTING_QUICK_PLAY)
        ps.quick_play_stats = self.parse_detailed_stats(view, quick_mode)

        state = self._advance(tag, state, PipelineState.EXTRACTING_COMPETITIVE)
        ps.competitive_stats = self.parse_detailed_stats(view, competitive_mode)
        ps.competitive_stats.season = self.parse_season(document)

        state = self._advance(tag, state, PipelineState.AGGREGATING)
        aggregate_totals(ps)

        self._advance(tag, state, PipelineState.DONE)
        logger.info(
            "Parsed stats for '%s' on %s: %s games played, %s ratings",
            tag, view.platform, ps.games_played, len(ps.ratings),
        )
        return ps

    def profile_url(self, tag: str) -> str:
        """Career page URL for a BattleTag ('Name#1234' -> '.../career/Name-1234/')."""
        return f"{self.career_url}/{quote(tag.replace('#', '-'), safe='-')}/"

    def parse_detailed_stats(self, platform: PlatformView, mode: str) -> StatsCollection:
        """Top heroes and career stats for one game mode of a platform view."""
        hero_section = platform.view.select_one(self.profile.hero_summary_section.format(mode=mode))
        career_section = platform.view.select_one(self.profile.career_section.format(mode=mode))
        return StatsCollection(
            top_heroes=parse_hero_stats(hero_section, self.profile),
            career_stats=parse_career_stats(career_section, self.profile),
        )

    def parse_season(self, document: BeautifulSoup) -> Optional[int]:
        marker = document.select_one(self.profile.season_marker)
        if marker is None:
            return None
        season = parse_type(clean_value(str(marker.get(self.profile.season_attr) or "")))
        return season if isinstance(season, int) else None

    # --- Internal helpers ---

    @staticmethod
    def _advance(tag: str, current: PipelineState, new: PipelineState) -> PipelineState:
        logger.debug("[%s] %s -> %s", tag, current.value, new.value)
        return new

    @staticmethod
    def _upstream(tag: str, call: Callable[[str], Any], arg: str) -> Any:
        """Run a network collaborator, reporting any failure as UpstreamUnavailableError."""
        try:
            return call(arg)
        except UpstreamUnavailableError:
            logger.warning("[%s] %s -> %s", tag, arg, PipelineState.UPSTREAM_UNAVAILABLE.value)
            raise
        except (OSError, HTTPException) as exc:
            logger.warning("[%s] %s -> %s: %s", tag, arg, PipelineState.UPSTREAM_UNAVAILABLE.value, exc)
            raise UpstreamUnavailableError(f"Request for '{arg}' failed: {exc}") from exc

    def _check_document(self, document: BeautifulSoup, tag: str) -> Tag:
        """Return the masthead, or raise if the page is not a usable career page."""
        heading = document.select_one(self.profile.not_found_heading)
        if heading is not None and heading.get_text(strip=True) == self.profile.not_found_text:
            raise PlayerNotFoundError(f"Career page for '{tag}' not found")

        masthead = document.select_one(self.profile.masthead)
        if masthead is None:
            raise MalformedDocumentError(f"Career page for '{tag}' has no masthead")
        return masthead

    @staticmethod
    def _private_stats(resolution: AccountResolution) -> PlayerStats:
        candidate = resolution.candidate
        portrait = candidate.portrait if candidate is not None else ""
        return PlayerStats(
            name=resolution.display_name,
            icon=portrait if portrait.startswith(("http://", "https://")) else "",
            private=True,
        )


def stats(tag: str, platform: str = PLATFORM_PC) -> PlayerStats:
    """Scrape `tag` with a default HTTP client."""
    return OverwatchScraper().stats(tag, platform)
