# ovrstat/scraper/platform.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from bs4 import BeautifulSoup, Tag

from ovrstat.errors import MalformedDocumentError
from ovrstat.selectors import CURRENT_PROFILE, SelectorProfile

logger = logging.getLogger(__name__)


@dataclass
class PlatformView:
    """The part of the career page that belongs to one platform."""

    platform: str
    name: str
    view: Tag
    rank_wrapper: Optional[Tag] = None


def resolve_platform_key(platform_key: str, profile: SelectorProfile = CURRENT_PROFILE) -> Optional[str]:
    """Map a public alias ('pc', 'psn', ...) to the page's internal platform id."""
    return profile.platform_aliases.get((platform_key or "").strip().lower())


def list_platforms(document: BeautifulSoup, profile: SelectorProfile = CURRENT_PROFILE) -> Dict[str, PlatformView]:
    """
    Map every platform filter tab on the page to its view.

    Tabs whose view is missing (the site hides views for platforms the player
    has not used) are skipped.

    Raises:
        MalformedDocumentError: If the page has no platform filter tabs at all
    """
    tabs = document.select(profile.platform_filter)
    if not tabs:
        raise MalformedDocumentError("Career page has no platform filters")

    platforms: Dict[str, PlatformView] = {}
    for tab in tabs:
        tab_id = tab.get("id") or ""
        if tab_id.endswith(profile.platform_filter_suffix):
            tab_id = tab_id[: -len(profile.platform_filter_suffix)]
        if not tab_id:
            continue

        view = document.select_one(profile.platform_view.format(platform=tab_id))
        if view is None:
            logger.warning("Platform tab '%s' has no view, skipping", tab_id)
            continue

        platforms[tab_id] = PlatformView(
            platform=tab_id,
            name=tab.get_text(strip=True),
            view=view,
            rank_wrapper=document.select_one(profile.platform_rank_wrapper.format(platform=tab_id)),
        )
    return platforms


def locate_platform(
    document: BeautifulSoup,
    platform_key: str,
    profile: SelectorProfile = CURRENT_PROFILE,
) -> Optional[PlatformView]:
    """Return the view for `platform_key`, or None when the page does not offer it."""
    internal_id = resolve_platform_key(platform_key, profile)
    if internal_id is None:
        return None
    return list_platforms(document, profile).get(internal_id)
