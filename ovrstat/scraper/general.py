# ovrstat/scraper/general.py
"""
Identity and summary fields from the career page masthead.
"""

from __future__ import annotations

import posixpath
from typing import List, Optional
from urllib.parse import parse_qs, urlsplit

from bs4 import Tag

from ovrstat.models import PlayerStats, Rating
from ovrstat.selectors import CURRENT_PROFILE, SelectorProfile
from .platform import PlatformView


def _attr(scope: Optional[Tag], selector: str, attr: str) -> str:
    if scope is None:
        return ""
    node = scope.select_one(selector)
    if node is None:
        return ""
    value = node.get(attr)
    return value.strip() if isinstance(value, str) else ""


def _text(scope: Optional[Tag], selector: str) -> str:
    if scope is None:
        return ""
    node = scope.select_one(selector)
    return node.get_text(strip=True) if node is not None else ""


def unwrap_icon(src: str) -> str:
    """
    Resolve '/svg?path=<real url>' icon indirections to the real URL.

    Anything else is returned unchanged.
    """
    if not src.startswith("/svg"):
        return src
    paths = parse_qs(urlsplit(src).query).get("path")
    if paths and paths[0]:
        return paths[0]
    return src


def parse_endorsement_level(icon: str, profile: SelectorProfile = CURRENT_PROFILE) -> int:
    match = profile.endorsement_pattern.search(icon or "")
    return int(match.group(1)) if match else 0


def role_from_icon(icon: str) -> str:
    """Role name from an icon URL like '.../tank-0bb1d4f9a7.svg'."""
    base = posixpath.basename(urlsplit(icon).path)
    if not base:
        return ""
    if "-" in base:
        return base[: base.index("-")]
    return posixpath.splitext(base)[0]


def parse_rating(wrapper: Tag, profile: SelectorProfile = CURRENT_PROFILE) -> Rating:
    role_icon = unwrap_icon(_attr(wrapper, profile.role_icon, "src"))
    rank_icon = unwrap_icon(_attr(wrapper, profile.rank_icon, "src"))

    rating = Rating(role=role_from_icon(role_icon), role_icon=role_icon, rank_icon=rank_icon)
    match = profile.rank_pattern.search(rank_icon)
    if match:
        rating.group = match.group(1)
        rating.tier = int(match.group(2))
    return rating


def parse_ratings(platform: PlatformView, profile: SelectorProfile = CURRENT_PROFILE) -> List[Rating]:
    if platform.rank_wrapper is None:
        return []
    return [parse_rating(wrapper, profile) for wrapper in platform.rank_wrapper.select(profile.role_wrapper)]


def parse_general_info(
    platform: PlatformView,
    masthead: Tag,
    profile: SelectorProfile = CURRENT_PROFILE,
) -> PlayerStats:
    """Read identity, endorsement and per-role ratings into a fresh PlayerStats."""
    ps = PlayerStats()
    ps.icon = unwrap_icon(_attr(masthead, profile.portrait, "src"))
    ps.name = _text(masthead, profile.name)
    ps.title = _text(masthead, profile.title)
    ps.endorsement_icon = unwrap_icon(_attr(masthead, profile.endorsement_icon, "src"))
    ps.endorsement = parse_endorsement_level(ps.endorsement_icon, profile)
    ps.ratings = parse_ratings(platform, profile)
    return ps
